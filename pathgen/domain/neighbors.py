"""Neighbor generation and placement rules for path growth."""

from typing import TYPE_CHECKING, List, Tuple

from .types import Coord, Direction, PathFindingOptions, Role

if TYPE_CHECKING:
    from .path import Path
    from .world import World


def step(coord: Coord, direction: Direction) -> Coord:
    """Get the coordinate one cell away in the given direction."""
    if direction == Direction.NONE:
        raise ValueError(f"Cannot step from {coord} in direction {direction.name}")
    d_row, d_col = direction.offset
    return (coord[0] + d_row, coord[1] + d_col)


def direction_between(from_coord: Coord, to_coord: Coord) -> Direction:
    """
    Get the cardinal direction from one cell to another.

    Returns NONE if the cells are identical or not in the same row or column.
    """
    d_row = to_coord[0] - from_coord[0]
    d_col = to_coord[1] - from_coord[1]

    if (d_row == 0 and d_col == 0) or (d_row != 0 and d_col != 0):
        return Direction.NONE

    if d_row < 0:
        return Direction.UP
    if d_col > 0:
        return Direction.RIGHT
    if d_row > 0:
        return Direction.DOWN
    return Direction.LEFT


def can_place_node(world: "World", path: "Path", row: int, col: int,
                   options: PathFindingOptions) -> bool:
    """
    Check whether path may grow into (row, col).

    The cell must be inside the grid and every node already there must belong
    to a different path, must not be a BLOCK marker, and may only be foreign
    when intersection is allowed.
    """
    if not world.in_bounds(row, col):
        return False

    for node in world.nodes_at(row, col):
        # Never intersect ourself (this also covers our own BLOCK markers)
        if node.path_id == path.id:
            return False

        if node.role == Role.BLOCK:
            return False

        if not options.allow_intersection:
            return False

    return True


def can_place_start(world: "World", row: int, col: int, options: PathFindingOptions) -> bool:
    """Check whether a new path may put its START node on (row, col)."""
    if not world.in_bounds(row, col):
        return False

    for node in world.nodes_at(row, col):
        if node.role == Role.BLOCK:
            return False
        if options.allow_intersection:
            continue
        if options.share_start_cell and node.role == Role.START:
            continue
        return False

    return True


def get_legal_moves(world: "World", path: "Path", options: PathFindingOptions) -> List[Tuple[Direction, Coord]]:
    """
    Get the legal moves from the path's tail.

    Returns list of (direction, target_coord) tuples in UP, RIGHT, DOWN, LEFT order.
    """
    tail = path.tail_node
    if tail is None:
        raise ValueError(f"Path {path.id} has no nodes to grow from")

    moves = []
    for direction in Direction.cardinal():
        row, col = step(tail.coord, direction)
        if can_place_node(world, path, row, col, options):
            moves.append((direction, (row, col)))
    return moves
