import pytest

from mazequest.maze import ENTRY, OPEN, WALL, Grid


def test_from_strings_dimensions_and_lookup(corridor_grid):
    g = corridor_grid
    assert g.size == (5, 5)
    assert g[1][2] == OPEN
    assert g[0][0] == WALL
    assert g.is_open((1, 3))
    assert g.is_wall((2, 2))
    assert g.is_open(ENTRY)


def test_out_of_bounds_is_wall_not_error(corridor_grid):
    for coord in ((-1, 0), (0, -1), (5, 2), (2, 5), (99, 99)):
        assert not corridor_grid.in_bounds(coord)
        assert corridor_grid.is_wall(coord)
        assert not corridor_grid.is_open(coord)


def test_wall_positions_and_open_cells_partition_grid(corridor_grid):
    walls = corridor_grid.wall_positions()
    opens = list(corridor_grid.open_cells())
    assert opens == [(1, 1), (1, 2), (1, 3), (2, 1), (3, 1)]
    assert len(walls) + len(opens) == 25
    assert not set(walls) & set(opens)
    assert walls[0] == (0, 0)


def test_border_is_wall(corridor_grid):
    assert corridor_grid.border_is_wall()
    breached = Grid.from_strings(["#.#", "#.#", "###"])
    assert not breached.border_is_wall()


def test_grid_is_immutable(corridor_grid):
    with pytest.raises(TypeError):
        corridor_grid[1][1] = WALL


def test_round_trip_strings_and_equality(corridor_grid):
    lines = corridor_grid.to_strings()
    assert Grid.from_strings(lines) == corridor_grid
    assert corridor_grid.to_dict()["cells"] == lines


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["###", "##"],
        ["#x#", "###", "###"],
    ],
)
def test_invalid_grids_rejected(lines):
    with pytest.raises(ValueError):
        Grid.from_strings(lines)
