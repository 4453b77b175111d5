"""
回合结算模块

协调赌注验证、结果抽样、谓词判定、奖金汇总和银行更新，并持有回合状态机的转换。
"""

from .types import BetResult, SettlementBreakdown, SettlementResult
from .calculator import compute_settlement, payout_for
from .engine import RoundSettlementEngine

__all__ = [
    'BetResult',
    'SettlementBreakdown',
    'SettlementResult',
    'compute_settlement',
    'payout_for',
    'RoundSettlementEngine',
]
