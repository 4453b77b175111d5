"""
游戏状态存储

唯一拥有全部可变实体；外部读者可随时读取，但只有结算引擎写入。
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Optional

from ..bank import BankLedger
from ..bets import BetId
from ..market import MarketQuote, MarketPosition
from ..odds import Terms
from ..outcome import Outcome
from ..state_machine import RoundPhase, RoundStateMachine
from .types import RoundRecord

__all__ = ['GameState', 'DEFAULT_QUOTE']

DEFAULT_QUOTE = MarketQuote(bid=21, ask=23)


def _history(limit: int = 80) -> Deque[RoundRecord]:
    return deque(maxlen=limit)


@dataclass
class GameState:
    """游戏状态，包含银行、赌注、条款、市场和回合历史"""
    bank: BankLedger
    stakes: Dict[BetId, int] = field(default_factory=dict)
    terms: Dict[BetId, Terms] = field(default_factory=dict)
    market_quote: MarketQuote = DEFAULT_QUOTE
    market_position: MarketPosition = field(default_factory=MarketPosition.empty)
    history: Deque[RoundRecord] = field(default_factory=_history)  # 新的在前
    current_round: int = 0
    state_machine: RoundStateMachine = field(default_factory=RoundStateMachine)
    last_outcome: Optional[Outcome] = None

    def __post_init__(self):
        """验证游戏状态的有效性"""
        if self.history.maxlen is None or self.history.maxlen <= 0:
            raise ValueError("history必须是有正上限的deque")
        if self.current_round < 0:
            raise ValueError("current_round不能为负数")
        for bet_id, stake in self.stakes.items():
            if stake < 0:
                raise ValueError(f"{bet_id.value}的赌注不能为负数: {stake}")

    @classmethod
    def create(cls, initial_bank: int = 1000, history_limit: int = 80) -> 'GameState':
        """按初始余额和历史上限创建空状态"""
        return cls(bank=BankLedger(initial_bank), history=_history(history_limit))

    @property
    def bankroll(self) -> int:
        return self.bank.balance

    @property
    def phase(self) -> RoundPhase:
        return self.state_machine.current_phase

    @property
    def is_round_active(self) -> bool:
        return self.phase is RoundPhase.ACTIVE

    @property
    def has_completed_round(self) -> bool:
        return self.phase is RoundPhase.SETTLED

    @property
    def history_limit(self) -> int:
        return self.history.maxlen

    def stake_for(self, bet_id: BetId) -> int:
        return self.stakes.get(bet_id, 0)

    @property
    def bet_stake_total(self) -> int:
        """硬币/骰子/两张牌赌注合计（不含市场占用资金）"""
        return sum(self.stakes.values())

    @property
    def total_stake(self) -> int:
        """总敞口 = 全部赌注 + 市场占用资金"""
        return self.bet_stake_total + self.market_position.committed
