"""Tests for pathgen.utils.grid_export.

Tests: numpy views used to place tiles and walls.
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from pathgen.domain.types import Direction, Role
from pathgen.domain.world import World
from pathgen.utils.grid_export import (
    EMPTY,
    closed_sides,
    occupancy_counts,
    open_sides_grid,
    path_index_grid,
    role_grid,
)


@pytest.fixture
def two_path_world() -> World:
    """2x3 world: path 0 runs along the top row, path 1 drops down from the start."""
    world = World(2, 3, allow_intersection=True)
    top = world.create_path()
    top.create_node(0, 0, Role.START)
    top.create_node(0, 1)
    top.create_node(0, 2, Role.END)
    down = world.create_path()
    down.create_node(0, 0, Role.START)
    down.create_node(1, 0, Role.END)
    return world


class TestGridExport:
    """grid_export - array views of a world."""

    def test_path_index_grid(self, two_path_world: World) -> None:
        assert_array_equal(path_index_grid(two_path_world), np.array([
            [0, 0, 0],
            [1, EMPTY, EMPTY],
        ]))

    def test_path_index_grid_skips_detached_paths(self, two_path_world: World) -> None:
        top = two_path_world.child_paths[0]
        two_path_world.remove_path(top)
        assert_array_equal(path_index_grid(two_path_world), np.array([
            [0, EMPTY, EMPTY],
            [0, EMPTY, EMPTY],
        ]))

    def test_role_grid(self, two_path_world: World) -> None:
        assert_array_equal(role_grid(two_path_world), np.array([
            [Role.START.value, Role.NORMAL.value, Role.END.value],
            [Role.END.value, EMPTY, EMPTY],
        ]))

    def test_occupancy_counts(self, two_path_world: World) -> None:
        assert_array_equal(occupancy_counts(two_path_world), np.array([
            [2, 1, 1],
            [1, 0, 0],
        ]))

    def test_open_sides_grid(self, two_path_world: World) -> None:
        grid = open_sides_grid(two_path_world)
        assert grid.dtype == np.uint8
        # start cell opens right (path 0) and down (path 1)
        assert_array_equal(grid, np.array([
            [2 | 4, 8 | 2, 8],
            [1, 0, 0],
        ], dtype=np.uint8))

    def test_closed_sides(self) -> None:
        assert closed_sides(2) == [Direction.UP, Direction.DOWN, Direction.LEFT]
        assert closed_sides(0) == [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]
        assert closed_sides(15) == []
