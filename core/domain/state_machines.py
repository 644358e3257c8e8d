"""
State Machines

분개 상태 전이 규칙.

    pending ──approve──▶ approved  (전기 대상)
       └────reject────▶ rejected  (종료, 전기 안 함)
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """허용되지 않은 상태 전이"""
    pass


def _value(state: str | Enum) -> str:
    return state.value if isinstance(state, Enum) else state


class StateMachine:
    """전이 표 기반 상태 머신

    Args:
        initial_state: 초기 상태
        transitions: {from_state: [to_states]} (표에 없는 상태는 종료 상태)
        name: 로그/에러 메시지용 이름
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = _value(initial_state)
        self._allowed = {src: frozenset(dst) for src, dst in transitions.items()}
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        return self._state

    @property
    def allowed(self) -> frozenset[str]:
        """현재 상태에서 갈 수 있는 상태"""
        return self._allowed.get(self._state, frozenset())

    def can_transition(self, to_state: str | Enum) -> bool:
        return _value(to_state) in self.allowed

    def transition(self, to_state: str | Enum) -> str:
        """목표 상태로 전이하고 새 상태 반환

        Raises:
            StateMachineError: 전이 표에 없는 전이
        """
        target = _value(to_state)
        if target not in self.allowed:
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {sorted(self.allowed)}"
            )

        self._history.append((self._state, target))
        logger.debug(f"{self._name}: {self._state} → {target}")
        self._state = target
        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """(이전, 이후) 전이 이력 사본"""
        return list(self._history)


class JournalStateMachine(StateMachine):
    """분개 상태 머신 (pending에서만 전이 가능)"""

    TRANSITIONS: dict[str, list[str]] = {
        "pending": ["approved", "rejected"],
    }

    def __init__(self, initial_state: str | Enum = "pending"):
        super().__init__(initial_state, self.TRANSITIONS, name="JournalStateMachine")

    @property
    def is_terminal(self) -> bool:
        return not self.allowed

    @property
    def is_postable(self) -> bool:
        """원장 전기 대상 여부 (approved만)"""
        return self._state == "approved"
