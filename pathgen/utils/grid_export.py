"""Array views of a generated world for tile and wall placement."""

import numpy as np

from ..domain.types import Direction
from ..domain.world import World

EMPTY = -1

# Bit per open side, used by open_sides_grid
SIDE_BITS = {
    Direction.UP: 1,
    Direction.RIGHT: 2,
    Direction.DOWN: 4,
    Direction.LEFT: 8,
}


def path_index_grid(world: World) -> np.ndarray:
    """
    Map each cell to the creation-order index of the first path occupying it.

    Returns an int array of shape (rows, cols) with EMPTY for free cells.
    """
    grid = np.full(world.shape, EMPTY, dtype=int)
    order = {path.id: index for index, path in enumerate(world.child_paths)}

    for row, col in world.occupied_cells():
        for node in world.nodes_at(row, col):
            if node.path_id in order:
                grid[row, col] = order[node.path_id]
                break
    return grid


def role_grid(world: World) -> np.ndarray:
    """Map each cell to the Role value of its first node, EMPTY for free cells."""
    grid = np.full(world.shape, EMPTY, dtype=int)
    for row, col in world.occupied_cells():
        node = world.first_node_at(row, col)
        grid[row, col] = node.role.value
    return grid


def occupancy_counts(world: World) -> np.ndarray:
    """Number of nodes registered in each cell."""
    counts = np.zeros(world.shape, dtype=int)
    for row, col in world.occupied_cells():
        counts[row, col] = len(world.nodes_at(row, col))
    return counts


def open_sides_grid(world: World) -> np.ndarray:
    """
    Bitmask of open sides per cell (see SIDE_BITS).

    A side is open when some node in the cell continues its path through it.
    Sides of free cells and dead ends stay closed, which is where walls go.
    """
    grid = np.zeros(world.shape, dtype=np.uint8)
    for row, col in world.occupied_cells():
        mask = 0
        for node in world.nodes_at(row, col):
            path = world.path_of(node)
            if path is None:
                continue
            for side in path.open_sides(node):
                mask |= SIDE_BITS[side]
        grid[row, col] = mask
    return grid


def closed_sides(mask: int) -> list:
    """Directions whose bit is not set in an open-sides mask."""
    return [side for side, bit in SIDE_BITS.items() if not mask & bit]
