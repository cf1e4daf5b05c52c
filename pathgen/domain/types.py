"""Core type definitions for grid path generation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from .errors import ConfigurationError
from .fsm import GenerationState

if TYPE_CHECKING:
    from .path import Path
    from .world import World

# Coordinate type for grid positions, (row, col)
Coord = Tuple[int, int]


class Direction(Enum):
    """Cardinal directions between grid cells.

    Rows grow downward and columns grow to the right, so UP decreases the row
    and RIGHT increases the column.
    """
    NONE = 0
    UP = 1
    RIGHT = 2
    DOWN = 3
    LEFT = 4

    @property
    def opposite(self) -> "Direction":
        """The reverse of this direction (UP <-> DOWN, RIGHT <-> LEFT)."""
        return _OPPOSITES[self]

    @property
    def offset(self) -> Coord:
        """(row delta, col delta) of a single step in this direction."""
        return _OFFSETS[self]

    @classmethod
    def cardinal(cls) -> Tuple["Direction", ...]:
        """The four movement directions, in the order candidates are checked."""
        return (cls.UP, cls.RIGHT, cls.DOWN, cls.LEFT)


_OPPOSITES = {
    Direction.NONE: Direction.NONE,
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
}

_OFFSETS = {
    Direction.NONE: (0, 0),
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}


class Role(Enum):
    """The part a node plays in its path."""
    NORMAL = 0
    START = 1
    END = 2
    TEMPORARY = 3
    BLOCK = 4


# Roles that only exist while a path is being grown
SCAFFOLD_ROLES = frozenset({Role.TEMPORARY, Role.BLOCK})


@dataclass(frozen=True)
class PathFindingOptions:
    """Configuration for a generation run.

    At least one of ending_row / ending_col must be given. A path ends on the
    first cell whose row matches ending_row (if set) and whose column matches
    ending_col (if set).
    """
    num_rows: int
    num_cols: int
    starting_row: int
    starting_col: int
    ending_row: Optional[int] = None
    ending_col: Optional[int] = None
    max_number_of_paths: int = 1
    allow_intersection: bool = False
    # Whether START nodes of different paths may share the start cell
    share_start_cell: bool = True

    def __post_init__(self):
        """Validate the configuration, failing before anything is allocated."""
        if self.ending_row is None and self.ending_col is None:
            raise ConfigurationError(
                "The arguments ending_row and ending_col cannot both be None.")

        if self.num_rows <= 0:
            raise ConfigurationError(
                f"Invalid number of rows '{self.num_rows}'. "
                "Number of rows must be a positive integer.",
                details={"field": "num_rows", "value": self.num_rows})
        if self.num_cols <= 0:
            raise ConfigurationError(
                f"Invalid number of columns '{self.num_cols}'. "
                "Number of columns must be a positive integer.",
                details={"field": "num_cols", "value": self.num_cols})
        if self.max_number_of_paths <= 0:
            raise ConfigurationError(
                f"Invalid maximum number of paths '{self.max_number_of_paths}'. "
                "Maximum number of paths must be a positive integer.",
                details={"field": "max_number_of_paths", "value": self.max_number_of_paths})

        if not 0 <= self.starting_row < self.num_rows:
            raise ConfigurationError(
                f"Invalid start row '{self.starting_row}'. Start row must be between "
                f"zero (inclusive) and the number of rows '{self.num_rows}' (exclusive).",
                details={"field": "starting_row", "value": self.starting_row})
        if not 0 <= self.starting_col < self.num_cols:
            raise ConfigurationError(
                f"Invalid start column '{self.starting_col}'. Start column must be between "
                f"zero (inclusive) and the number of columns '{self.num_cols}' (exclusive).",
                details={"field": "starting_col", "value": self.starting_col})

        if self.ending_row is not None and not 0 <= self.ending_row < self.num_rows:
            raise ConfigurationError(
                f"Invalid ending row '{self.ending_row}'. Ending row must be between "
                f"zero (inclusive) and the number of rows '{self.num_rows}' (exclusive).",
                details={"field": "ending_row", "value": self.ending_row})
        if self.ending_col is not None and not 0 <= self.ending_col < self.num_cols:
            raise ConfigurationError(
                f"Invalid ending column '{self.ending_col}'. Ending column must be between "
                f"zero (inclusive) and the number of columns '{self.num_cols}' (exclusive).",
                details={"field": "ending_col", "value": self.ending_col})

    @property
    def start(self) -> Coord:
        """Start cell of every path."""
        return (self.starting_row, self.starting_col)

    def is_end_cell(self, row: int, col: int) -> bool:
        """Check whether a cell satisfies the end condition."""
        return ((self.ending_row is None or self.ending_row == row) and
                (self.ending_col is None or self.ending_col == col))


@dataclass
class PathResult:
    """Outcome of one path attempt."""
    state: GenerationState
    path: Optional["Path"] = None
    steps: int = 0
    nodes_added: int = 0
    nodes_removed: int = 0

    @property
    def success(self) -> bool:
        """Whether the attempt produced a committed path."""
        return self.state == GenerationState.PATH_FINISHED and self.path is not None


@dataclass
class GenerationResult:
    """Outcome of a whole generation run."""
    world: "World"
    options: PathFindingOptions
    path_results: List[PathResult] = field(default_factory=list)

    @property
    def paths_generated(self) -> int:
        """Number of committed paths in the world."""
        return len(self.world.child_paths)

    @property
    def requested(self) -> int:
        return self.options.max_number_of_paths

    @property
    def complete(self) -> bool:
        """Whether every requested path was produced."""
        return self.paths_generated >= self.requested

    @property
    def failed_attempts(self) -> int:
        return sum(1 for result in self.path_results if not result.success)
