"""Maze generation invariant tests.

Invariants covered:
1. Border rows and columns are always walls, in every variant.
2. The entry cell is open and every open cell is reachable from it.
3. Perfect mode yields a tree: open-cell adjacencies == open cells - 1.
4. Same seed and config -> identical grid and markers.
5. Relaxed variants only add openings, never remove reachability.
"""

from __future__ import annotations

import pytest

from mazequest.maze import (
    DEAD_END,
    ENTRY,
    EXTRA_CONNECTIONS,
    LOOP,
    MAIN_PATH,
    MISLEADING,
    MISLEADING_PATH,
    InvalidDimensionsError,
    MazeConfig,
    MazeGenerator,
    generate,
    reachable_from,
)

from tests.maze_test_utils import border_cells, flood_fill, iter_open, open_edge_count

SEEDS = [1, 7, 42, 101, 2024]


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("variant", [None, EXTRA_CONNECTIONS, MISLEADING])
def test_border_always_wall(seed, variant):
    g = generate(21, 31, seed=seed, variant=variant).grid
    assert g.border_is_wall()
    for r, c in border_cells(g):
        assert g.is_wall((r, c)), f"Border breach at {(r, c)} seed={seed} variant={variant}"


@pytest.mark.parametrize("seed", SEEDS)
def test_perfect_maze_fully_connected(seed):
    g = generate(25, 25, seed=seed).grid
    assert g.is_open(ENTRY)
    opens = set(iter_open(g))
    reach = flood_fill(g, ENTRY)
    missing = opens - reach
    assert not missing, f"Seed {seed} has unreachable cells: {sorted(missing)[:5]}"
    # library BFS agrees with the independent flood fill
    assert reachable_from(g, ENTRY) == reach


@pytest.mark.parametrize("seed", SEEDS)
def test_perfect_maze_is_a_tree(seed):
    g = generate(21, 21, seed=seed).grid
    assert open_edge_count(g) == len(set(iter_open(g))) - 1


def test_every_odd_interior_cell_carved():
    g = generate(15, 19, seed=3).grid
    for r in range(1, 14, 2):
        for c in range(1, 18, 2):
            assert g.is_open((r, c))


def test_even_interior_crossings_never_opened():
    # (even, even) cells sit between four connectors and stay solid in perfect mode.
    g = generate(21, 21, seed=11).grid
    for r in range(2, 20, 2):
        for c in range(2, 20, 2):
            assert g.is_wall((r, c))


def test_deterministic_for_seed():
    a = generate(31, 31, seed=314159, variant=MISLEADING)
    b = generate(31, 31, seed=314159, variant=MISLEADING)
    assert a.grid == b.grid
    assert a.markers == b.markers
    assert a.seed == b.seed == 314159


def test_different_seeds_vary():
    grids = {generate(21, 21, seed=s).grid for s in range(10)}
    assert len(grids) > 1


def test_random_seed_recorded_and_replayable():
    first = generate(15, 15)
    assert isinstance(first.seed, int)
    again = generate(15, 15, seed=first.seed)
    assert again.grid == first.grid


def test_external_random_usage_does_not_affect_generation():
    import random

    a = generate(21, 21, seed=5).grid
    random.seed(0)
    random.random()
    b = generate(21, 21, seed=5).grid
    assert a == b


def test_main_path_markers_are_connectors():
    result = generate(21, 21, seed=9)
    main = [m.coord for m in result.markers if m.tag == MAIN_PATH]
    assert main, "no main path connectors recorded"
    for r, c in main:
        assert result.grid.is_open((r, c))
        # connectors sit between two odd cells: exactly one coordinate is even
        assert (r % 2) != (c % 2)
    # a perfect maze on odd cells carves one connector per odd cell except the entry
    odd_cells = 10 * 10
    assert len(main) == odd_cells - 1


def test_main_path_only_in_perfect_mode():
    result = generate(21, 21, seed=9)
    assert {m.tag for m in result.markers} == {MAIN_PATH}


@pytest.mark.parametrize("seed", SEEDS)
def test_extra_connections_add_cycles_but_keep_connectivity(seed):
    cfg = MazeConfig(rows=31, cols=31, seed=seed, variant=EXTRA_CONNECTIONS, extra_connection_chance=0.5)
    result = MazeGenerator(cfg).run()
    g = result.grid
    opens = set(iter_open(g))
    assert flood_fill(g, ENTRY) == opens
    loops = [m for m in result.markers if m.tag == LOOP]
    assert loops, "expected at least one extra connection at 50% chance"
    # each extra connector closes exactly one cycle
    assert open_edge_count(g) == len(opens) - 1 + len(loops)


def test_extra_connections_zero_chance_stays_a_tree():
    result = generate(21, 21, seed=77, variant=EXTRA_CONNECTIONS, extra_connection_chance=0.0)
    g = result.grid
    assert all(m.tag == MAIN_PATH for m in result.markers)
    assert open_edge_count(g) == len(set(iter_open(g))) - 1


@pytest.mark.parametrize("seed", SEEDS)
def test_misleading_variant_classifies_and_keeps_connectivity(seed):
    result = generate(31, 31, seed=seed, variant=MISLEADING)
    g = result.grid
    assert flood_fill(g, ENTRY) == set(iter_open(g))
    extras = [m for m in result.markers if m.tag != MAIN_PATH]
    assert extras
    assert {m.tag for m in extras} <= {DEAD_END, LOOP, MISLEADING_PATH}
    for m in extras:
        assert g.is_open(m.coord)
    # one opening per anchor at most
    assert len(extras) <= 15 * 15


def test_misleading_thresholds_control_tags():
    everything_dead = generate(
        21, 21, seed=4, variant=MISLEADING, misleading_chance=1.0, dead_end_threshold=1.0, loop_threshold=1.0
    )
    tags = {m.tag for m in everything_dead.markers if m.tag != MAIN_PATH}
    assert tags == {DEAD_END}


def test_misleading_zero_chance_matches_perfect():
    perfect = generate(21, 21, seed=8).grid
    assert generate(21, 21, seed=8, variant=MISLEADING, misleading_chance=0.0).grid == perfect


def test_smallest_grid_has_only_entry_open():
    g = generate(3, 3, seed=1).grid
    assert list(g.open_cells()) == [ENTRY]
    assert g.border_is_wall()


def test_even_dimensions_when_allowed():
    result = generate(10, 12, seed=12, require_odd=False)
    g = result.grid
    assert g.size == (10, 12)
    assert g.border_is_wall()
    assert flood_fill(g, ENTRY) == set(iter_open(g))
    # the last interior row/col is even and never carved
    assert all(g.is_wall((8, c)) for c in range(g.cols))


@pytest.mark.parametrize("rows,cols", [(2, 9), (9, 1), (8, 9)])
def test_invalid_dimensions_refused_before_generation(rows, cols):
    with pytest.raises(InvalidDimensionsError):
        generate(rows, cols, seed=1)


def test_large_grid_does_not_hit_recursion_limit():
    rows = cols = 401
    result = generate(rows, cols, seed=123)
    # a recursive carve would need this many nested calls
    assert result.metrics["max_stack_depth"] > 1000
    assert result.grid.border_is_wall()


def test_metrics_populated():
    result = generate(21, 21, seed=21, variant=MISLEADING)
    m = result.metrics
    assert m["open_cells"] == len(set(result.grid.open_cells()))
    assert m["open_cells"] + m["wall_cells"] == 21 * 21
    assert m["main_path_connectors"] == 99
    assert m["extra_connections"] == m["dead_ends"] + m["loops"] + m["misleading"]
    assert set(m["phase_ms"]) == {"init", "carve", "misleading", "seal_border"}


def test_metrics_disabled():
    assert generate(11, 11, seed=1, enable_metrics=False).metrics == {}
