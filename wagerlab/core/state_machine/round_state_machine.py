"""
回合状态机
"""
from typing import Dict, FrozenSet, List

from ..exceptions import InvalidTransitionError
from .types import RoundPhase, PhaseTransition

__all__ = ['RoundStateMachine']

_ALLOWED_TRANSITIONS: Dict[RoundPhase, FrozenSet[RoundPhase]] = {
    RoundPhase.IDLE: frozenset({RoundPhase.ACTIVE}),
    RoundPhase.ACTIVE: frozenset({RoundPhase.SETTLED}),
    RoundPhase.SETTLED: frozenset({RoundPhase.IDLE}),
}


class RoundStateMachine:
    """回合状态机"""

    def __init__(self, max_history: int = 200):
        self._current_phase = RoundPhase.IDLE
        self._transition_history: List[PhaseTransition] = []
        self._max_history = max_history

    @property
    def current_phase(self) -> RoundPhase:
        """获取当前阶段"""
        return self._current_phase

    @property
    def transition_history(self) -> List[PhaseTransition]:
        """获取状态转换历史"""
        return self._transition_history.copy()

    def can_transition_to(self, target_phase: RoundPhase) -> bool:
        """检查是否可以转换到目标阶段"""
        return target_phase in _ALLOWED_TRANSITIONS[self._current_phase]

    def require_phase(self, phase: RoundPhase, command: str) -> None:
        """
        要求当前处于指定阶段

        Raises:
            InvalidTransitionError: 当前阶段不同时
        """
        if self._current_phase is not phase:
            raise InvalidTransitionError(
                f"{command} 只能在 {phase.name} 阶段执行，当前阶段: {self._current_phase.name}",
                phase=self._current_phase.name,
                command=command,
            )

    def transition_to(self, target_phase: RoundPhase, trigger: str, round_number: int = 0) -> None:
        """
        执行到目标阶段的转换

        Args:
            target_phase: 目标阶段
            trigger: 触发转换的命令名
            round_number: 当前回合编号

        Raises:
            InvalidTransitionError: 当转换不合法时，阶段不变
        """
        if not self.can_transition_to(target_phase):
            raise InvalidTransitionError(
                f"不能从 {self._current_phase.name} 转换到 {target_phase.name}",
                phase=self._current_phase.name,
                command=trigger,
            )

        self._transition_history.append(PhaseTransition(
            from_phase=self._current_phase,
            to_phase=target_phase,
            trigger=trigger,
            round_number=round_number,
        ))
        if len(self._transition_history) > self._max_history:
            self._transition_history.pop(0)
        self._current_phase = target_phase

    def reset(self) -> None:
        """重置状态机到初始状态"""
        self._current_phase = RoundPhase.IDLE
        self._transition_history.clear()
