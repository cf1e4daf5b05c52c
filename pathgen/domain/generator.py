"""Randomized backtracking path generation."""

import logging
from typing import Optional

from ..utils.rng import SeededRNG
from .errors import ConfigurationError, WorldInvariantError
from .fsm import GenerationState, PathStateMachine
from .neighbors import can_place_start, get_legal_moves
from .path import Path
from .types import SCAFFOLD_ROLES, GenerationResult, PathFindingOptions, PathResult, Role
from .world import World

logger = logging.getLogger(__name__)


class PathGenerator:
    """
    Grows paths through a World one cell at a time.

    Each path is a randomized depth-first search from the start cell: the tail
    moves to a uniformly chosen legal neighbor until it lands on an end cell.
    On a dead end the tail is retired as a BLOCK marker and the search resumes
    from the previous node; a dead end at the START node fails the attempt.

    The random source only needs a choice(seq) method, so a seeded
    SeededRNG or random.Random makes runs reproducible.
    """

    def __init__(self, options: PathFindingOptions, rng=None, world: Optional[World] = None):
        self.options = options
        self.rng = rng if rng is not None else SeededRNG()
        self.state_machine = PathStateMachine()
        if world is not None:
            _check_world_matches(world, options)
        self.world = world if world is not None else World.from_options(options)
        self.current_path: Optional[Path] = None
        self._reset_counters()

    def _reset_counters(self):
        self.steps = 0
        self.nodes_added = 0
        self.nodes_removed = 0

    @property
    def state(self) -> GenerationState:
        return self.state_machine.current_state

    @property
    def step_limit(self) -> int:
        """Upper bound on steps for one path: each cell is entered and blocked at most once."""
        return 2 * self.options.num_rows * self.options.num_cols + 1

    def reset(self):
        """Discard the current world and start over with an empty one."""
        self.world = World.from_options(self.options)
        self.state_machine.reset()
        self.current_path = None
        self._reset_counters()

    def begin_path(self) -> GenerationState:
        """
        Start a new path attempt by placing its START node.

        Returns the resulting state: GROWING, PATH_FINISHED if the start cell
        already satisfies the end condition, or PATH_FAILED if the start cell
        is unavailable.
        """
        if self.state_machine.is_finished():
            self._transition(GenerationState.IDLE)
        if not self.state_machine.is_idle():
            raise WorldInvariantError(
                f"Cannot begin a new path while path {self.current_path.id} is still growing")

        self._reset_counters()
        self.current_path = None
        start_row, start_col = self.options.start

        if not can_place_start(self.world, start_row, start_col, self.options):
            logger.debug("Start cell %s is unavailable", self.options.start)
            self._transition(GenerationState.PATH_FAILED, {"coord": self.options.start})
            return self.state

        path = self.world.create_path()
        path.create_node(start_row, start_col, Role.START)
        self.current_path = path
        self._transition(GenerationState.GROWING, {"path_id": path.id, "coord": self.options.start})

        if self.options.is_end_cell(start_row, start_col):
            self._finish()

        return self.state

    def step(self) -> GenerationState:
        """
        Execute one step of the search from the current tail.

        Returns ADDED_NODE, REMOVED_NODE, PATH_FINISHED or PATH_FAILED.
        """
        if not self.state_machine.is_growing():
            raise WorldInvariantError(f"No path is growing (state: {self.state.value})")
        if self.state != GenerationState.GROWING:
            self._transition(GenerationState.GROWING)

        self.steps += 1
        if self.steps > self.step_limit:
            raise WorldInvariantError(
                f"Path {self.current_path.id} exceeded {self.step_limit} steps",
                details={"steps": self.steps})

        path = self.current_path
        tail = path.tail_node
        moves = get_legal_moves(self.world, path, self.options)

        if moves:
            direction, (row, col) = self.rng.choice(moves)
            node = path.create_node(row, col, Role.NORMAL)
            self.nodes_added += 1
            self._transition(GenerationState.ADDED_NODE,
                             {"path_id": path.id, "coord": node.coord, "direction": direction})

            if self.options.is_end_cell(row, col):
                node.role = Role.END
                self._finish()
            return self.state

        # Dead end
        if tail.role == Role.START:
            self._fail()
            return self.state

        path.mark_tail(Role.BLOCK)
        self.nodes_removed += 1
        self._transition(GenerationState.REMOVED_NODE, {"path_id": path.id, "coord": tail.coord})
        return self.state

    def run_path(self) -> PathResult:
        """Run one path attempt to completion."""
        self.begin_path()
        while self.state_machine.is_growing():
            self.step()
        logger.debug("Attempt ended after %d step(s): %s",
                     self.steps, self.state_machine.get_state_description())

        return PathResult(
            state=self.state,
            path=self.current_path if self.state == GenerationState.PATH_FINISHED else None,
            steps=self.steps,
            nodes_added=self.nodes_added,
            nodes_removed=self.nodes_removed,
        )

    def generate(self) -> GenerationResult:
        """
        Generate paths until the configured maximum is reached or an attempt fails.

        A failed attempt leaves no trace in the world and ends the run; it is
        reported in the result rather than raised.
        """
        result = GenerationResult(world=self.world, options=self.options)

        while len(self.world.child_paths) < self.options.max_number_of_paths:
            path_result = self.run_path()
            result.path_results.append(path_result)
            if not path_result.success:
                break

        logger.info("Generated %d of %d path(s) in a %dx%d world",
                    result.paths_generated, result.requested,
                    self.options.num_rows, self.options.num_cols)
        return result

    def _finish(self):
        path = self.current_path
        pruned = path.remove_nodes_with_role(SCAFFOLD_ROLES)
        logger.debug("Path %d finished at %s with %d node(s), %d marker(s) pruned",
                     path.id, path.tail_node.coord, len(path), pruned)
        self._transition(GenerationState.PATH_FINISHED, {"path_id": path.id, "length": len(path)})

    def _fail(self):
        path = self.current_path
        logger.debug("Path %d failed: no legal move from the start cell", path.id)
        path.delete()
        self._transition(GenerationState.PATH_FAILED, {"path_id": path.id})

    def _transition(self, target: GenerationState, context: Optional[dict] = None):
        if not self.state_machine.transition_to(target, context):
            raise WorldInvariantError(
                f"Invalid transition {self.state.value} -> {target.value}")


def _check_world_matches(world: World, options: PathFindingOptions):
    """Reject a world whose shape or placement policy disagrees with the options."""
    expected = {
        "shape": (options.num_rows, options.num_cols),
        "allow_intersection": options.allow_intersection,
        "share_start_cell": options.share_start_cell,
    }
    actual = {
        "shape": world.shape,
        "allow_intersection": world.allow_intersection,
        "share_start_cell": world.share_start_cell,
    }
    for name, value in expected.items():
        if actual[name] != value:
            raise ConfigurationError(
                f"World {name} {actual[name]!r} does not match the options ({value!r})",
                details={"field": name, "world": actual[name], "options": value})


def generate_paths(options: PathFindingOptions, rng=None) -> GenerationResult:
    """
    Convenience function to build a fresh world and fill it with paths.

    Args:
        options: Generation configuration
        rng: Random source with a choice(seq) method (a fresh SeededRNG if None)

    Returns:
        GenerationResult holding the world and per-attempt outcomes
    """
    return PathGenerator(options, rng=rng).generate()
