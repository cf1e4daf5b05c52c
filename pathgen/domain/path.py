"""Path nodes and the ordered paths that own them."""

from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Set, Tuple

from .errors import WorldInvariantError
from .neighbors import direction_between
from .types import SCAFFOLD_ROLES, Coord, Direction, Role

if TYPE_CHECKING:
    from .world import World


class PathNode:
    """
    A single occupied cell belonging to exactly one path.

    The node keeps only the id of its owning path and a reference to the world
    that resolves it. Its coordinate is read-only here; relocating a
    registered node goes through World.move_node so the spatial index stays
    in step.
    """

    def __init__(self, node_id: int, path_id: Optional[int], row: int, col: int,
                 role: Role = Role.NORMAL, world: Optional["World"] = None):
        self.id = node_id
        self.path_id = path_id
        self._row = row
        self._col = col
        self.role = role
        self._world = world

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def coord(self) -> Coord:
        return (self._row, self._col)

    @property
    def world(self) -> Optional["World"]:
        """The world this node was created in, or None once deleted."""
        return self._world

    @property
    def path(self) -> Optional["Path"]:
        """The owning path, or None once deleted."""
        world = self.world
        if world is None or self.path_id is None:
            return None
        return world.get_path(self.path_id)

    @property
    def previous(self) -> Optional["PathNode"]:
        path = self.path
        return path.previous_node(self) if path is not None else None

    @property
    def next(self) -> Optional["PathNode"]:
        path = self.path
        return path.next_node(self) if path is not None else None

    @property
    def direction_to_previous(self) -> Direction:
        path = self.path
        return path.direction_to_previous(self) if path is not None else Direction.NONE

    @property
    def direction_to_next(self) -> Direction:
        path = self.path
        return path.direction_to_next(self) if path is not None else Direction.NONE

    def _relocate(self, row: int, col: int):
        """Update the stored coordinate. Only World.move_node calls this."""
        self._row = row
        self._col = col

    def _detach(self):
        """Drop ownership once the node has been removed from its path."""
        self.path_id = None
        self._world = None

    def __repr__(self) -> str:
        return f"PathNode(id={self.id}, path={self.path_id}, at={self.coord}, role={self.role.name})"


class Path:
    """
    An ordered chain of nodes from a start cell toward an end cell.

    Insertion order is traversal order: the first node is the head (the START
    node) and the last is the tail, the active search frontier. Besides the
    traversal sequence a path owns scaffolding markers (BLOCK / TEMPORARY
    nodes) that stay registered in the world while the path is grown and are
    pruned once it is finished.
    """

    def __init__(self, world: "World", path_id: int):
        self.id = path_id
        self._world = world
        self._nodes: List[PathNode] = []
        self._markers: List[PathNode] = []

    @property
    def world(self) -> "World":
        return self._world

    @property
    def nodes(self) -> Tuple[PathNode, ...]:
        """Traversal sequence, head first."""
        return tuple(self._nodes)

    @property
    def markers(self) -> Tuple[PathNode, ...]:
        """Scaffolding nodes still registered for this path."""
        return tuple(self._markers)

    @property
    def head_node(self) -> Optional[PathNode]:
        return self._nodes[0] if self._nodes else None

    @property
    def tail_node(self) -> Optional[PathNode]:
        return self._nodes[-1] if self._nodes else None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[PathNode]:
        return iter(self._nodes)

    def __contains__(self, node: PathNode) -> bool:
        return self.index_of(node) is not None

    def coords(self) -> List[Coord]:
        """Coordinates of the traversal sequence, head first."""
        return [node.coord for node in self._nodes]

    # Growing

    def create_node(self, row: int, col: int, role: Role = Role.NORMAL) -> PathNode:
        """Create a node at (row, col), register it in the world and append it."""
        world = self.world
        node = PathNode(world.allocate_node_id(), self.id, row, col, role, world)
        self.append_node(node)
        return node

    def append_node(self, node: PathNode):
        """Add a node at the tail. Appending a node already in the path is a no-op."""
        if node.path_id != self.id:
            raise WorldInvariantError(
                f"Cannot append {node!r} to path {self.id}; it belongs to path {node.path_id}")
        if node in self:
            return
        self.world.add_node(node, node.row, node.col)
        self._nodes.append(node)

    # Shrinking

    def remove_last_node(self) -> Optional[PathNode]:
        """Deregister and drop the tail node. Returns it, or None if the path is empty."""
        if not self._nodes:
            return None
        node = self._nodes.pop()
        self._discard(node)
        return node

    def remove_all_nodes(self):
        """Deregister every node and marker and empty the path."""
        for node in self._nodes + self._markers:
            self._discard(node)
        self._nodes = []
        self._markers = []

    def remove_nodes_with_role(self, roles: Iterable[Role]) -> int:
        """
        Deregister every node (traversal or marker) whose role is in roles.

        Remaining nodes keep their relative order. Returns the number removed.
        """
        roles = set(roles)
        removed = 0
        kept_nodes = []
        for node in self._nodes:
            if node.role in roles:
                self._discard(node)
                removed += 1
            else:
                kept_nodes.append(node)
        kept_markers = []
        for node in self._markers:
            if node.role in roles:
                self._discard(node)
                removed += 1
            else:
                kept_markers.append(node)
        self._nodes = kept_nodes
        self._markers = kept_markers
        return removed

    def mark_tail(self, role: Role = Role.BLOCK) -> Optional[PathNode]:
        """
        Retire the tail node as a scaffolding marker.

        The node leaves the traversal sequence, takes the given role and stays
        registered in the world, so its cell remains excluded for this path.
        """
        if role not in SCAFFOLD_ROLES:
            raise ValueError(f"Tail can only be marked with a scaffold role, got {role.name}")
        if not self._nodes:
            return None
        node = self._nodes.pop()
        node.role = role
        self._markers.append(node)
        return node

    def delete(self):
        """Remove every node and detach this path from its world."""
        self.world.delete_path(self)

    def _discard(self, node: PathNode):
        self._world.remove_node(node, node.row, node.col)
        node._detach()

    # Neighbors

    def index_of(self, node: PathNode) -> Optional[int]:
        """Position of node in the traversal sequence, or None."""
        for index, candidate in enumerate(self._nodes):
            if candidate is node:
                return index
        return None

    def _relative_node(self, node: PathNode, offset: int) -> Optional[PathNode]:
        index = self.index_of(node)
        if index is None:
            return None
        target = index + offset
        if 0 <= target < len(self._nodes):
            return self._nodes[target]
        return None

    def previous_node(self, node: PathNode) -> Optional[PathNode]:
        return self._relative_node(node, -1)

    def next_node(self, node: PathNode) -> Optional[PathNode]:
        return self._relative_node(node, 1)

    def direction_to_previous(self, node: PathNode) -> Direction:
        other = self.previous_node(node)
        return direction_between(node.coord, other.coord) if other else Direction.NONE

    def direction_to_next(self, node: PathNode) -> Direction:
        other = self.next_node(node)
        return direction_between(node.coord, other.coord) if other else Direction.NONE

    def open_sides(self, node: PathNode) -> Set[Direction]:
        """Sides of the node's cell that lead to its neighbors in this path."""
        sides = {self.direction_to_previous(node), self.direction_to_next(node)}
        sides.discard(Direction.NONE)
        return sides

    def is_tail(self, node: PathNode) -> bool:
        return self.tail_node is node

    def __repr__(self) -> str:
        return f"Path(id={self.id}, nodes={len(self._nodes)}, markers={len(self._markers)})"
