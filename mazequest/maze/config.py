from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .errors import InvalidConfigError, InvalidDimensionsError

EXTRA_CONNECTIONS = "extra_connections"
MISLEADING = "misleading"
VARIANTS = (EXTRA_CONNECTIONS, MISLEADING)

MIN_DIMENSION = 3

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class MazeConfig:
    rows: int = 21
    cols: int = 21
    seed: Optional[int] = None
    variant: Optional[str] = None
    extra_connection_chance: float = 0.1
    misleading_chance: float = 0.7
    dead_end_threshold: float = 0.4
    loop_threshold: float = 0.7
    require_odd: bool = True
    enable_metrics: bool = True

    def validate(self) -> "MazeConfig":
        validate_dimensions(self.rows, self.cols, require_odd=self.require_odd)
        if self.variant is not None and self.variant not in VARIANTS:
            raise InvalidConfigError(f"unknown maze variant {self.variant!r} (expected one of {', '.join(VARIANTS)})")
        for name in ("extra_connection_chance", "misleading_chance", "dead_end_threshold", "loop_threshold"):
            val = getattr(self, name)
            if not 0.0 <= val <= 1.0:
                raise InvalidConfigError(f"{name} must be within [0, 1], got {val}")
        if self.dead_end_threshold > self.loop_threshold:
            raise InvalidConfigError("dead_end_threshold must not exceed loop_threshold")
        return self

    def with_overrides(self, **overrides) -> "MazeConfig":
        """Copy with non-None keyword overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], **overrides) -> "MazeConfig":
        """Build a config from ``MAZE_*`` keys (``os.environ`` or Flask ``app.config``).

        Values may be strings (environment) or already typed (app config).
        Explicit keyword overrides take precedence over the mapping.
        """
        cfg = cls()
        fields = {
            "MAZE_ROWS": ("rows", int),
            "MAZE_COLS": ("cols", int),
            "MAZE_SEED": ("seed", int),
            "MAZE_VARIANT": ("variant", normalize_variant),
            "MAZE_EXTRA_CONNECTION_CHANCE": ("extra_connection_chance", float),
            "MAZE_MISLEADING_CHANCE": ("misleading_chance", float),
            "MAZE_REQUIRE_ODD": ("require_odd", _flag),
            "MAZE_ENABLE_METRICS": ("enable_metrics", _flag),
        }
        for key, (attr, conv) in fields.items():
            raw = mapping.get(key)
            if raw is None or raw == "":
                continue
            try:
                setattr(cfg, attr, conv(raw))
            except (TypeError, ValueError) as exc:
                raise InvalidConfigError(f"invalid value for {key}: {raw!r}") from exc
        return cfg.with_overrides(**overrides)


def _flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUE_VALUES


def normalize_variant(raw: Any) -> Optional[str]:
    val = str(raw).strip().lower()
    if val in ("", "none", "perfect"):
        return None
    return val


def validate_dimensions(rows: int, cols: int, require_odd: bool = True) -> None:
    """Reject dimensions the carving algorithm cannot use.

    Raises InvalidDimensionsError; callers run this before generation.
    """
    if not isinstance(rows, int) or not isinstance(cols, int) or isinstance(rows, bool) or isinstance(cols, bool):
        raise InvalidDimensionsError(rows, cols, "dimensions must be integers")
    if rows < MIN_DIMENSION or cols < MIN_DIMENSION:
        raise InvalidDimensionsError(rows, cols, f"minimum size is {MIN_DIMENSION}x{MIN_DIMENSION}")
    if require_odd and (rows % 2 == 0 or cols % 2 == 0):
        raise InvalidDimensionsError(rows, cols, "rows and cols must be odd")


__all__ = [
    "MazeConfig",
    "validate_dimensions",
    "normalize_variant",
    "EXTRA_CONNECTIONS",
    "MISLEADING",
    "VARIANTS",
    "MIN_DIMENSION",
]
