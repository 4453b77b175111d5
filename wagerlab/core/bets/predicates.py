"""
下注谓词注册表

每个下注对应一个纯、全函数的布尔谓词，只读取当前回合结果中对应游戏的部分，
从不自行抽样。
"""

from typing import Callable, Dict, Sequence, Tuple

from ..deck import Card
from ..outcome import Outcome
from .types import BetId, require_complete

__all__ = [
    'evaluate',
    'coin_exact_sequence',
    'coin_exactly_k_heads',
    'coin_at_least_k_heads',
    'coin_first_is_heads',
    'coin_contains_hh',
    'dice_sum_is',
    'dice_doubles',
    'dice_sum_at_least',
    'dice_at_least_one',
    'dice_odd_sum',
    'dice_first_greater',
    'dice_sum_in',
    'two_card_product_lt',
    'two_card_sum_even',
    'two_card_different_colors',
    'two_card_at_least_one_face',
]


# ==================== 硬币（作用于序列字符串，如"HTH"） ====================

def coin_exact_sequence(coins: str, sequence: str) -> bool:
    return coins == sequence


def coin_exactly_k_heads(coins: str, k: int) -> bool:
    return coins.count("H") == k


def coin_at_least_k_heads(coins: str, k: int) -> bool:
    return coins.count("H") >= k


def coin_first_is_heads(coins: str) -> bool:
    return coins[:1] == "H"


def coin_contains_hh(coins: str) -> bool:
    return "HH" in coins


# ==================== 骰子 ====================

def dice_sum_is(dice: Tuple[int, int], total: int) -> bool:
    return dice[0] + dice[1] == total


def dice_doubles(dice: Tuple[int, int]) -> bool:
    return dice[0] == dice[1]


def dice_sum_at_least(dice: Tuple[int, int], total: int) -> bool:
    return dice[0] + dice[1] >= total


def dice_at_least_one(dice: Tuple[int, int], face: int) -> bool:
    return face in dice


def dice_odd_sum(dice: Tuple[int, int]) -> bool:
    return (dice[0] + dice[1]) % 2 == 1


def dice_first_greater(dice: Tuple[int, int]) -> bool:
    return dice[0] > dice[1]


def dice_sum_in(dice: Tuple[int, int], totals: Sequence[int]) -> bool:
    return dice[0] + dice[1] in totals


# ==================== 两张牌（只看前两张） ====================

def two_card_product_lt(cards: Sequence[Card], limit: int) -> bool:
    return cards[0].rank.value * cards[1].rank.value < limit


def two_card_sum_even(cards: Sequence[Card]) -> bool:
    return (cards[0].rank.value + cards[1].rank.value) % 2 == 0


def two_card_different_colors(cards: Sequence[Card]) -> bool:
    return cards[0].is_red != cards[1].is_red


def two_card_at_least_one_face(cards: Sequence[Card]) -> bool:
    return cards[0].rank.is_face or cards[1].rank.is_face


_PREDICATES: Dict[BetId, Callable[[Outcome], bool]] = {
    BetId.EXACT_HTH: lambda o: coin_exact_sequence(o.coin_string, "HTH"),
    BetId.EXACT_THT: lambda o: coin_exact_sequence(o.coin_string, "THT"),
    BetId.EXACTLY_2_HEADS: lambda o: coin_exactly_k_heads(o.coin_string, 2),
    BetId.EXACTLY_1_HEAD: lambda o: coin_exactly_k_heads(o.coin_string, 1),
    BetId.AT_LEAST_2_HEADS: lambda o: coin_at_least_k_heads(o.coin_string, 2),
    BetId.FIRST_COIN_H: lambda o: coin_first_is_heads(o.coin_string),
    BetId.CONTAINS_HH: lambda o: coin_contains_hh(o.coin_string),
    BetId.SUM_7: lambda o: dice_sum_is(o.dice, 7),
    BetId.DOUBLES: lambda o: dice_doubles(o.dice),
    BetId.SUM_GTE_10: lambda o: dice_sum_at_least(o.dice, 10),
    BetId.AT_LEAST_ONE_6: lambda o: dice_at_least_one(o.dice, 6),
    BetId.ODD_SUM: lambda o: dice_odd_sum(o.dice),
    BetId.FIRST_GT_SECOND: lambda o: dice_first_greater(o.dice),
    BetId.SUM_4_OR_5: lambda o: dice_sum_in(o.dice, (4, 5)),
    BetId.PRODUCT_LT_50: lambda o: two_card_product_lt(o.first_two, 50),
    BetId.SUM_EVEN: lambda o: two_card_sum_even(o.first_two),
    BetId.DIFFERENT_COLORS: lambda o: two_card_different_colors(o.first_two),
    BetId.AT_LEAST_ONE_FACE: lambda o: two_card_at_least_one_face(o.first_two),
}

require_complete(_PREDICATES, "谓词表")


def evaluate(bet_id: BetId, outcome: Outcome) -> bool:
    """
    在给定结果上判定下注是否获胜

    Args:
        bet_id: 下注标识
        outcome: 当前回合的结果

    Returns:
        是否获胜
    """
    return _PREDICATES[bet_id](outcome)
