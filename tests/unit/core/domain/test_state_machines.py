"""
상태 머신 테스트
"""

import pytest

from core.domain.state_machines import (
    JournalStateMachine,
    StateMachine,
    StateMachineError,
)
from core.ledger.types import JournalStatus


class TestStateMachine:
    """StateMachine 기본 동작 테스트"""

    def test_transition_and_history(self) -> None:
        machine = StateMachine("a", {"a": ["b"], "b": ["c"]}, name="Test")

        machine.transition("b")
        machine.transition("c")

        assert machine.state == "c"
        assert machine.history == [("a", "b"), ("b", "c")]

    def test_invalid_transition(self) -> None:
        machine = StateMachine("a", {"a": ["b"]}, name="Test")

        with pytest.raises(StateMachineError, match="Cannot transition from a to c"):
            machine.transition("c")
        assert machine.state == "a"

    def test_history_is_copy(self) -> None:
        machine = StateMachine("a", {"a": ["b"]})
        machine.transition("b")
        machine.history.clear()
        assert len(machine.history) == 1


class TestJournalStateMachine:
    """분개 상태 머신 테스트"""

    def test_default_pending(self) -> None:
        machine = JournalStateMachine()
        assert machine.state == "pending"
        assert not machine.is_terminal

    @pytest.mark.parametrize("target", [JournalStatus.APPROVED, JournalStatus.REJECTED])
    def test_pending_transitions(self, target: JournalStatus) -> None:
        machine = JournalStateMachine()
        assert machine.can_transition(target)

        machine.transition(target)

        assert machine.state == target.value
        assert machine.is_terminal

    def test_only_approved_is_postable(self) -> None:
        assert JournalStateMachine("approved").is_postable
        assert not JournalStateMachine("rejected").is_postable
        assert not JournalStateMachine("pending").is_postable

    @pytest.mark.parametrize("start", ["approved", "rejected"])
    def test_terminal_states_are_final(self, start: str) -> None:
        machine = JournalStateMachine(start)

        for target in ("pending", "approved", "rejected"):
            assert not machine.can_transition(target)
        with pytest.raises(StateMachineError):
            machine.transition("pending")
