"""
结算计算

纯函数：给定赌注、条款、市场头寸和结果，计算奖金与市场盈亏。
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from ..bets import BetId, evaluate
from ..market import MarketPosition, MarketPricer
from ..odds import Terms
from ..outcome import Outcome
from .types import BetResult, SettlementBreakdown

__all__ = ['compute_settlement', 'payout_for']


def payout_for(stake: int, multiplier: float) -> int:
    """round(stake * multiplier)，采用half-up取整"""
    amount = Decimal(stake) * Decimal(str(multiplier))
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_settlement(stakes: Mapping[BetId, int],
                       terms: Mapping[BetId, Terms],
                       position: MarketPosition,
                       outcome: Outcome) -> SettlementBreakdown:
    """
    计算结算明细

    Args:
        stakes: 每个下注的赌注
        terms: 本回合的条款
        position: 市场头寸
        outcome: 本回合结果

    Returns:
        结算明细；只有赌注为正的下注出现在bet_results中
    """
    results = []
    for bet_id in BetId:
        stake = stakes.get(bet_id, 0)
        if stake <= 0:
            continue
        bet_terms = terms.get(bet_id)
        # 没有条款的下注不会中奖
        won = bet_terms is not None and evaluate(bet_id, outcome)
        multiplier = bet_terms.multiplier if bet_terms is not None else 0.0
        results.append(BetResult(
            bet_id=bet_id,
            stake=stake,
            multiplier=multiplier,
            won=won,
            payout=payout_for(stake, multiplier) if won else 0,
        ))

    return SettlementBreakdown(
        bet_results=tuple(results),
        winnings=sum(r.payout for r in results),
        market_pnl=MarketPricer.settle(position, outcome.card_sum),
        market_committed=position.committed,
    )
