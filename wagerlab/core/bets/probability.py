"""
精确概率表

每个下注的获胜概率由组合推导得到，以fractions.Fraction表示，
与任何已抽样的结果无关。
"""

from fractions import Fraction
from math import comb
from typing import Callable, Dict

from .types import BetId, require_complete

__all__ = [
    'probability_of',
    'coin_exact_sequence_probability',
    'coin_exactly_k_heads_probability',
    'coin_at_least_k_heads_probability',
    'two_card_product_lt_probability',
]

COIN_OUTCOMES = 8         # 2^3
DICE_OUTCOMES = 36        # 6*6
DECK_SIZE = 52
ORDERED_TWO_CARD_DRAWS = DECK_SIZE * (DECK_SIZE - 1)
EVEN_RANK_CARDS = 24      # 2,4,6,8,10,12 × 4花色
ODD_RANK_CARDS = 28       # A,3,5,7,9,J,K × 4花色
FACE_CARDS = 12           # J,Q,K × 4花色


# ==================== 硬币 ====================

def coin_exact_sequence_probability() -> Fraction:
    """指定顺序的序列"""
    return Fraction(1, COIN_OUTCOMES)


def coin_exactly_k_heads_probability(k: int) -> Fraction:
    """恰好k个正面: C(3,k)/8"""
    if not 0 <= k <= 3:
        return Fraction(0)
    return Fraction(comb(3, k), COIN_OUTCOMES)


def coin_at_least_k_heads_probability(k: int) -> Fraction:
    """至少k个正面"""
    return sum((coin_exactly_k_heads_probability(i) for i in range(max(k, 0), 4)), Fraction(0))


# ==================== 两张牌 ====================

def two_card_product_lt_probability(limit: int) -> Fraction:
    """
    无放回抽取的前两张牌点数乘积小于limit的概率

    按点数对穷举：同点数有4*3=12种牌对，不同点数有4*4=16种牌对。
    """
    favorable = 0
    for r1 in range(1, 14):
        for r2 in range(1, 14):
            if r1 * r2 < limit:
                favorable += 12 if r1 == r2 else 16
    return Fraction(favorable, ORDERED_TWO_CARD_DRAWS)


def _two_card_sum_even() -> Fraction:
    # 同为偶数或同为奇数
    even_even = EVEN_RANK_CARDS * (EVEN_RANK_CARDS - 1)
    odd_odd = ODD_RANK_CARDS * (ODD_RANK_CARDS - 1)
    return Fraction(even_even + odd_odd, ORDERED_TWO_CARD_DRAWS)


def _two_card_different_colors() -> Fraction:
    # 第一张任意，第二张为另一颜色的26张之一
    return Fraction(26, DECK_SIZE - 1)


def _two_card_at_least_one_face() -> Fraction:
    non_face = DECK_SIZE - FACE_CARDS
    return 1 - Fraction(non_face * (non_face - 1), ORDERED_TWO_CARD_DRAWS)


_PROBABILITIES: Dict[BetId, Callable[[], Fraction]] = {
    BetId.EXACT_HTH: coin_exact_sequence_probability,
    BetId.EXACT_THT: coin_exact_sequence_probability,
    BetId.EXACTLY_2_HEADS: lambda: coin_exactly_k_heads_probability(2),
    BetId.EXACTLY_1_HEAD: lambda: coin_exactly_k_heads_probability(1),
    BetId.AT_LEAST_2_HEADS: lambda: coin_at_least_k_heads_probability(2),
    BetId.FIRST_COIN_H: lambda: Fraction(1, 2),
    BetId.CONTAINS_HH: lambda: Fraction(3, COIN_OUTCOMES),       # HHT, HHH, THH
    BetId.SUM_7: lambda: Fraction(6, DICE_OUTCOMES),
    BetId.DOUBLES: lambda: Fraction(6, DICE_OUTCOMES),
    BetId.SUM_GTE_10: lambda: Fraction(6, DICE_OUTCOMES),        # 4+6, 5+5, 5+6, 6+4, 6+5, 6+6
    BetId.AT_LEAST_ONE_6: lambda: Fraction(11, DICE_OUTCOMES),
    BetId.ODD_SUM: lambda: Fraction(18, DICE_OUTCOMES),
    BetId.FIRST_GT_SECOND: lambda: Fraction(15, DICE_OUTCOMES),
    BetId.SUM_4_OR_5: lambda: Fraction(7, DICE_OUTCOMES),        # 和为4有3种，和为5有4种
    BetId.PRODUCT_LT_50: lambda: two_card_product_lt_probability(50),
    BetId.SUM_EVEN: _two_card_sum_even,
    BetId.DIFFERENT_COLORS: _two_card_different_colors,
    BetId.AT_LEAST_ONE_FACE: _two_card_at_least_one_face,
}

require_complete(_PROBABILITIES, "概率表")


def probability_of(bet_id: BetId) -> Fraction:
    """
    获取下注的精确获胜概率

    Args:
        bet_id: 下注标识

    Returns:
        区间(0, 1]内的有理数
    """
    return _PROBABILITIES[bet_id]()
