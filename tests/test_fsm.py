"""Tests for pathgen.domain.fsm.

Tests: PathStateMachine transition map and callbacks.
"""

import pytest

from pathgen.domain.fsm import GenerationState, PathStateMachine


class TestPathStateMachine:
    """PathStateMachine - valid/invalid transitions."""

    def test_starts_idle(self) -> None:
        machine = PathStateMachine()
        assert machine.is_idle()
        assert not machine.is_growing()
        assert not machine.is_finished()
        assert machine.get_state_description() == "Ready to start a path"

    def test_growth_cycle(self) -> None:
        machine = PathStateMachine()
        assert machine.transition_to(GenerationState.GROWING)
        assert machine.transition_to(GenerationState.ADDED_NODE)
        assert machine.is_growing()
        assert machine.transition_to(GenerationState.GROWING)
        assert machine.transition_to(GenerationState.REMOVED_NODE)
        assert machine.transition_to(GenerationState.GROWING)
        assert machine.transition_to(GenerationState.ADDED_NODE)
        assert machine.transition_to(GenerationState.PATH_FINISHED)
        assert machine.is_finished()
        assert machine.transition_to(GenerationState.IDLE)

    @pytest.mark.parametrize("path, target", [
        ([], GenerationState.ADDED_NODE),
        ([], GenerationState.PATH_FINISHED),
        ([GenerationState.GROWING, GenerationState.REMOVED_NODE], GenerationState.PATH_FINISHED),
        ([GenerationState.GROWING, GenerationState.REMOVED_NODE], GenerationState.ADDED_NODE),
        ([GenerationState.GROWING, GenerationState.PATH_FAILED], GenerationState.GROWING),
    ])
    def test_invalid_transitions(self, path, target: GenerationState) -> None:
        machine = PathStateMachine()
        for state in path:
            assert machine.transition_to(state)
        before = machine.current_state
        assert not machine.transition_to(target)
        assert machine.current_state == before

    def test_callbacks(self) -> None:
        machine = PathStateMachine()
        entered = []
        transitions = []
        machine.on_state_enter(GenerationState.GROWING, lambda context: entered.append(context))
        machine.on_transition(GenerationState.IDLE, GenerationState.GROWING,
                              lambda old, new, context: transitions.append((old, new)))

        machine.transition_to(GenerationState.GROWING, {"path_id": 0})

        assert entered == [{"path_id": 0}]
        assert transitions == [(GenerationState.IDLE, GenerationState.GROWING)]

    def test_reset(self) -> None:
        machine = PathStateMachine()
        machine.transition_to(GenerationState.GROWING)
        machine.reset()
        assert machine.is_idle()
