"""
结算类型定义
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..bets import BetId
from ..market import MarketPosition
from ..outcome import Outcome

__all__ = ['BetResult', 'SettlementBreakdown', 'SettlementResult']


@dataclass(frozen=True)
class BetResult:
    """单个下注的结算结果，未中奖时payout为0（赌注不返还）"""
    bet_id: BetId
    stake: int
    multiplier: float
    won: bool
    payout: int


@dataclass(frozen=True)
class SettlementBreakdown:
    """在固定结果上计算出的结算明细，不涉及任何状态"""
    bet_results: Tuple[BetResult, ...]
    winnings: int
    market_pnl: int
    market_committed: int

    @property
    def credit(self) -> int:
        """入账金额：奖金 + 市场盈亏 + 返还的市场占用资金"""
        return self.winnings + self.market_pnl + self.market_committed

    @property
    def round_pnl(self) -> int:
        return self.winnings + self.market_pnl


@dataclass(frozen=True)
class SettlementResult:
    """一次完整回合结算的结果"""
    round_number: int
    outcome: Outcome
    total_stake: int
    winnings: int
    market_pnl: int
    market_committed: int
    bank_before: int
    bank_after: int
    bet_results: Tuple[BetResult, ...]
    position: MarketPosition

    @property
    def round_pnl(self) -> int:
        """回合盈亏 = 奖金 + 市场盈亏"""
        return self.winnings + self.market_pnl

    @property
    def net_change(self) -> int:
        """银行净变化"""
        return self.bank_after - self.bank_before

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'round_number': self.round_number,
            'coins': self.outcome.coin_string,
            'dice': list(self.outcome.dice),
            'cards': [str(card) for card in self.outcome.cards],
            'card_sum': self.outcome.card_sum,
            'total_stake': self.total_stake,
            'winnings': self.winnings,
            'market_pnl': self.market_pnl,
            'market_committed': self.market_committed,
            'round_pnl': self.round_pnl,
            'bank_before': self.bank_before,
            'bank_after': self.bank_after,
            'bets': [
                {'bet_id': r.bet_id.value, 'stake': r.stake, 'multiplier': r.multiplier,
                 'won': r.won, 'payout': r.payout}
                for r in self.bet_results
            ],
        }
