"""
状态存储类型定义
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..market import MarketPosition
from ..outcome import Outcome

__all__ = ['RoundRecord']


@dataclass(frozen=True)
class RoundRecord:
    """
    已结算回合的历史记录

    Attributes:
        round_number: 回合编号
        outcome: 本回合结果
        pnl: 回合盈亏 = 奖金 + 市场盈亏
        winnings: 硬币/骰子/两张牌的奖金合计
        market_pnl: 市场头寸盈亏
        total_stake: 回合开始时扣除的总额（含市场占用资金）
        bank_after: 结算后的银行余额
        position: 结算的市场头寸
    """
    round_number: int
    outcome: Outcome
    pnl: int
    winnings: int
    market_pnl: int
    total_stake: int
    bank_after: int
    position: MarketPosition = MarketPosition()

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'round_number': self.round_number,
            'coins': self.outcome.coin_string,
            'dice': list(self.outcome.dice),
            'cards': [str(card) for card in self.outcome.cards],
            'card_sum': self.outcome.card_sum,
            'pnl': self.pnl,
            'winnings': self.winnings,
            'market_pnl': self.market_pnl,
            'total_stake': self.total_stake,
            'bank_after': self.bank_after,
        }
