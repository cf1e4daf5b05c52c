"""The grid-wide spatial index and owner of every path and node.

How to work with World / Path / PathNode:

1) Create a world with World(rows, cols) or World.from_options(options).
2) Add a path with world.create_path().
3) Add nodes with path.create_node(row, col, role). The node is appended to the
   path and registered in the world's spatial index in one go; placing it in
   a cell the world's intersection policy forbids raises WorldInvariantError.
4) Drop the tail with path.remove_last_node(), or prune scaffolding with
   path.remove_nodes_with_role({Role.TEMPORARY, Role.BLOCK}).
5) Delete a path with path.delete() (clears it, then detaches it).
6) Reset everything with world.clear().
"""

import itertools
import logging
from typing import Dict, List, Optional

from .errors import ConfigurationError, WorldInvariantError
from .path import Path, PathNode
from .types import Coord, PathFindingOptions, Role

logger = logging.getLogger(__name__)


class World:
    """
    Rectangular grid holding any number of paths.

    Paths and nodes are owned here, keyed by small integer ids. The spatial
    index maps each occupied (row, col) to the ids of the nodes in that cell;
    a cell holds more than one node only where paths intersect or share the
    start cell.
    """

    def __init__(self, num_rows: int, num_cols: int, allow_intersection: bool = False,
                 share_start_cell: bool = True):
        if num_rows <= 0 or num_cols <= 0:
            raise ConfigurationError(
                f"World dimensions must be positive, got {num_rows}x{num_cols}",
                details={"num_rows": num_rows, "num_cols": num_cols})

        self.num_rows = num_rows
        self.num_cols = num_cols
        self.allow_intersection = allow_intersection
        self.share_start_cell = share_start_cell

        self._paths: Dict[int, Path] = {}
        self._nodes: Dict[int, PathNode] = {}
        self._cells: Dict[Coord, List[int]] = {}
        self._locations: Dict[int, Coord] = {}
        self._path_ids = itertools.count()
        self._node_ids = itertools.count()

    @classmethod
    def from_options(cls, options: PathFindingOptions) -> "World":
        """Create an empty world sized and configured for a generation run."""
        return cls(options.num_rows, options.num_cols,
                   allow_intersection=options.allow_intersection,
                   share_start_cell=options.share_start_cell)

    # Dimensions

    @property
    def shape(self) -> Coord:
        return (self.num_rows, self.num_cols)

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinate is within grid bounds."""
        return 0 <= row < self.num_rows and 0 <= col < self.num_cols

    # Paths

    @property
    def child_paths(self) -> List[Path]:
        """Attached paths in creation order."""
        return list(self._paths.values())

    def get_path(self, path_id: int) -> Optional[Path]:
        return self._paths.get(path_id)

    def path_of(self, node: PathNode) -> Optional[Path]:
        """Get the path owning a node, or None if it has been deleted."""
        if node.path_id is None:
            return None
        return self._paths.get(node.path_id)

    def create_path(self) -> Path:
        """Create a new empty path attached to this world."""
        path = Path(self, next(self._path_ids))
        self._paths[path.id] = path
        return path

    def remove_path(self, path: Path):
        """Detach a path from this world. Its nodes are left untouched."""
        if self._paths.get(path.id) is path:
            del self._paths[path.id]

    def delete_path(self, path: Path):
        """Remove every node of a path, then detach it."""
        path.remove_all_nodes()
        self.remove_path(path)

    def clear(self):
        """Delete every path and node in the world."""
        for path in self.child_paths:
            self.delete_path(path)

        if self._nodes:
            # Nodes registered without a path still attached
            logger.debug("Clearing %d orphaned node(s)", len(self._nodes))
            for node in list(self._nodes.values()):
                self.remove_node(node, node.row, node.col)
                node._detach()

    # Nodes

    def allocate_node_id(self) -> int:
        return next(self._node_ids)

    @property
    def node_count(self) -> int:
        """Number of registered nodes, markers included."""
        return len(self._nodes)

    def get_node(self, node_id: int) -> Optional[PathNode]:
        return self._nodes.get(node_id)

    def nodes_at(self, row: int, col: int) -> List[PathNode]:
        """Get every node occupying a cell. Empty list for free or out-of-range cells."""
        return [self._nodes[node_id] for node_id in self._cells.get((row, col), ())]

    def first_node_at(self, row: int, col: int) -> Optional[PathNode]:
        """Get the first node registered in a cell, or None."""
        node_ids = self._cells.get((row, col))
        return self._nodes[node_ids[0]] if node_ids else None

    def occupied_cells(self) -> List[Coord]:
        """Coordinates holding at least one node, in row-major order."""
        return sorted(self._cells)

    def add_node(self, node: PathNode, row: int, col: int):
        """
        Register a node in the cell (row, col).

        Re-adding a node at the cell it is already registered in is a no-op.

        Raises:
            WorldInvariantError: If the cell is outside the grid, does not
                match the node's coordinate, or the intersection policy
                forbids sharing it with the nodes already there
        """
        if node.coord != (row, col):
            raise WorldInvariantError(
                f"Cannot register {node!r} at ({row}, {col}); its coordinate is {node.coord}")

        registered = self._locations.get(node.id)
        if registered == (row, col):
            return
        if registered is not None:
            raise WorldInvariantError(
                f"{node!r} is already registered at {registered}; use move_node to relocate it")

        self._check_placement(node, row, col)
        self._register(node, row, col)

    def remove_node(self, node: PathNode, row: int, col: int):
        """
        Deregister a node from the cell (row, col).

        Removing a node that is not registered is a no-op.

        Raises:
            WorldInvariantError: If the node is registered under a different cell
        """
        registered = self._locations.get(node.id)
        if registered is None:
            return
        if registered != (row, col):
            raise WorldInvariantError(
                f"Cannot remove {node!r} from ({row}, {col}); it is registered at {registered}")
        self._deregister(node)

    def move_node(self, node: PathNode, row: int, col: int):
        """Relocate a registered node, keeping the spatial index consistent."""
        registered = self._locations.get(node.id)
        if registered is None:
            raise WorldInvariantError(f"Cannot move {node!r}; it is not registered in this world")
        if registered == (row, col):
            return

        self._check_placement(node, row, col)
        self._deregister(node)
        node._relocate(row, col)
        self._register(node, row, col)

    def _check_placement(self, node: PathNode, row: int, col: int):
        """Enforce the bounds and intersection policy for a node entering a cell."""
        if not self.in_bounds(row, col):
            raise WorldInvariantError(
                f"Cannot place {node!r} at ({row}, {col}); outside the {self.num_rows}x{self.num_cols} world")

        for other in self.nodes_at(row, col):
            if other is node:
                continue
            if other.path_id == node.path_id:
                raise WorldInvariantError(
                    f"Cannot place {node!r} at ({row}, {col}); path {node.path_id} already occupies it")
            if self.allow_intersection:
                continue
            if self.share_start_cell and node.role == Role.START and other.role == Role.START:
                continue
            raise WorldInvariantError(
                f"Cannot place {node!r} at ({row}, {col}); occupied by path {other.path_id} "
                "and intersection is not allowed")

    def _register(self, node: PathNode, row: int, col: int):
        self._cells.setdefault((row, col), []).append(node.id)
        self._nodes[node.id] = node
        self._locations[node.id] = (row, col)

    def _deregister(self, node: PathNode):
        coord = self._locations.pop(node.id)
        bucket = self._cells[coord]
        bucket.remove(node.id)
        if not bucket:
            del self._cells[coord]
        del self._nodes[node.id]

    def check_consistency(self):
        """
        Verify the spatial index and the paths' node lists agree.

        Raises:
            WorldInvariantError: On the first mismatch found
        """
        owned = {}
        for path in self._paths.values():
            for node in path.nodes + path.markers:
                if node.path_id != path.id:
                    raise WorldInvariantError(f"{node!r} is listed in path {path.id}")
                owned[node.id] = node

        if set(owned) != set(self._nodes):
            missing = sorted(set(owned) - set(self._nodes))
            extra = sorted(set(self._nodes) - set(owned))
            raise WorldInvariantError(
                f"Spatial index out of sync: unregistered={missing}, unowned={extra}",
                details={"unregistered": missing, "unowned": extra})

        for node_id, coord in self._locations.items():
            node = self._nodes[node_id]
            if node.coord != coord or node_id not in self._cells.get(coord, ()):
                raise WorldInvariantError(f"{node!r} is indexed under {coord}")

    def __repr__(self) -> str:
        return (f"World({self.num_rows}x{self.num_cols}, paths={len(self._paths)}, "
                f"nodes={len(self._nodes)})")
