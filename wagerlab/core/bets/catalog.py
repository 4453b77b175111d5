"""
下注目录

恰好18个固定下注定义，按游戏分组，顺序与显示顺序一致。
"""

from typing import Dict, Tuple

from .probability import probability_of
from .types import BetDefinition, BetId, GameType, require_complete

__all__ = ['BET_CATALOG', 'get_bet_definition', 'bets_for_game']

_LABELS: Dict[BetId, str] = {
    BetId.EXACT_HTH: "Exact order HTH",
    BetId.EXACT_THT: "Exact order THT",
    BetId.EXACTLY_2_HEADS: "Exactly 2 heads",
    BetId.EXACTLY_1_HEAD: "Exactly 1 head",
    BetId.AT_LEAST_2_HEADS: "At least 2 heads",
    BetId.FIRST_COIN_H: "First coin is H",
    BetId.CONTAINS_HH: "Contains HH (consecutive)",
    BetId.SUM_7: "Sum = 7",
    BetId.DOUBLES: "Doubles",
    BetId.SUM_GTE_10: "Sum >= 10",
    BetId.AT_LEAST_ONE_6: "At least one 6",
    BetId.ODD_SUM: "Odd sum",
    BetId.FIRST_GT_SECOND: "First die > second",
    BetId.SUM_4_OR_5: "Sum is 4 or 5",
    BetId.PRODUCT_LT_50: "Product of first 2 < 50",
    BetId.SUM_EVEN: "Sum of first 2 is even",
    BetId.DIFFERENT_COLORS: "Different colors",
    BetId.AT_LEAST_ONE_FACE: "At least one face card",
}

require_complete(_LABELS, "显示名称表")

BET_CATALOG: Tuple[BetDefinition, ...] = tuple(
    BetDefinition(
        id=bet_id,
        game=bet_id.game,
        probability=probability_of(bet_id),
        label=_LABELS[bet_id],
    )
    for bet_id in BetId
)

_BY_ID: Dict[BetId, BetDefinition] = {bet.id: bet for bet in BET_CATALOG}


def get_bet_definition(bet_id: BetId) -> BetDefinition:
    """获取下注定义"""
    return _BY_ID[bet_id]


def bets_for_game(game: GameType) -> Tuple[BetDefinition, ...]:
    """获取某个游戏的全部下注定义"""
    return tuple(bet for bet in BET_CATALOG if bet.game is game)
