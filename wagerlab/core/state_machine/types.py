"""
状态机类型定义
"""

from dataclasses import dataclass
from enum import Enum, auto

__all__ = ['RoundPhase', 'PhaseTransition']


class RoundPhase(Enum):
    """回合阶段枚举"""
    IDLE = auto()       # 可以调整赌注与交易
    ACTIVE = auto()     # 赌注已锁定，结果尚未抽样
    SETTLED = auto()    # 结果已抽样，盈亏已入账


@dataclass(frozen=True)
class PhaseTransition:
    """一次阶段转换记录"""
    from_phase: RoundPhase
    to_phase: RoundPhase
    trigger: str
    round_number: int
