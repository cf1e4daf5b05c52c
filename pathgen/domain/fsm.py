"""Finite State Machine for growing a single path."""

from enum import Enum
from typing import Callable, Dict, Optional, Set, Tuple


class GenerationState(Enum):
    """States a path attempt moves through."""
    IDLE = "idle"
    GROWING = "growing"
    ADDED_NODE = "added_node"
    REMOVED_NODE = "removed_node"
    PATH_FINISHED = "path_finished"
    PATH_FAILED = "path_failed"


class PathStateMachine:
    """
    Finite State Machine for one path attempt.

    State Transitions:
    IDLE -> GROWING (START node placed)
    IDLE -> PATH_FAILED (start cell unavailable)
    GROWING -> ADDED_NODE (moved to a legal neighbor)
    GROWING -> REMOVED_NODE (dead end, tail blocked and dropped)
    GROWING -> PATH_FINISHED (START already satisfies the end condition)
    GROWING -> PATH_FAILED (dead end at the START node)
    ADDED_NODE -> GROWING (new node is not an end cell)
    ADDED_NODE -> PATH_FINISHED (new node is an end cell)
    REMOVED_NODE -> GROWING (continue from the previous node)
    PATH_FINISHED -> IDLE (next attempt)
    PATH_FAILED -> IDLE (next attempt)
    """

    def __init__(self):
        self._current_state = GenerationState.IDLE
        self._state_callbacks: Dict[GenerationState, Callable] = {}
        self._transition_callbacks: Dict[Tuple[GenerationState, GenerationState], Callable] = {}
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> Dict[GenerationState, Set[GenerationState]]:
        """Build the valid state transition map."""
        return {
            GenerationState.IDLE: {GenerationState.GROWING, GenerationState.PATH_FAILED},
            GenerationState.GROWING: {
                GenerationState.ADDED_NODE, GenerationState.REMOVED_NODE,
                GenerationState.PATH_FINISHED, GenerationState.PATH_FAILED,
            },
            GenerationState.ADDED_NODE: {GenerationState.GROWING, GenerationState.PATH_FINISHED},
            GenerationState.REMOVED_NODE: {GenerationState.GROWING},
            GenerationState.PATH_FINISHED: {GenerationState.IDLE},
            GenerationState.PATH_FAILED: {GenerationState.IDLE},
        }

    @property
    def current_state(self) -> GenerationState:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: GenerationState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: GenerationState, context: Optional[dict] = None) -> bool:
        """
        Attempt to transition to the target state.

        Args:
            target_state: The state to transition to
            context: Optional context data passed to callbacks

        Returns:
            True if transition was successful, False otherwise
        """
        if not self.can_transition_to(target_state):
            return False

        old_state = self._current_state
        self._current_state = target_state

        transition_key = (old_state, target_state)
        if transition_key in self._transition_callbacks:
            self._transition_callbacks[transition_key](old_state, target_state, context)

        if target_state in self._state_callbacks:
            self._state_callbacks[target_state](context)

        return True

    def on_state_enter(self, state: GenerationState, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def on_transition(self, from_state: GenerationState, to_state: GenerationState,
                      callback: Callable[[GenerationState, GenerationState, Optional[dict]], None]):
        """Register a callback for a specific state transition."""
        self._transition_callbacks[(from_state, to_state)] = callback

    def reset(self):
        """Reset the state machine to IDLE without firing callbacks."""
        self._current_state = GenerationState.IDLE

    def is_idle(self) -> bool:
        return self._current_state == GenerationState.IDLE

    def is_growing(self) -> bool:
        """Check if the path can take another step."""
        return self._current_state in (
            GenerationState.GROWING, GenerationState.ADDED_NODE, GenerationState.REMOVED_NODE)

    def is_finished(self) -> bool:
        """Check if the attempt has ended (finished or failed)."""
        return self._current_state in (GenerationState.PATH_FINISHED, GenerationState.PATH_FAILED)

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            GenerationState.IDLE: "Ready to start a path",
            GenerationState.GROWING: "Path growing",
            GenerationState.ADDED_NODE: "Node added",
            GenerationState.REMOVED_NODE: "Dead end, node removed",
            GenerationState.PATH_FINISHED: "Path reached the end condition",
            GenerationState.PATH_FAILED: "No path obtainable",
        }
        return descriptions.get(self._current_state, "Unknown state")
