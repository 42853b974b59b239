from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'open_cells': 0,
        'wall_cells': 0,
        'main_path_connectors': 0,
        'extra_connections': 0,
        'dead_ends': 0,
        'loops': 0,
        'misleading': 0,
        'max_stack_depth': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
