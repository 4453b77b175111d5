"""
下注类型定义
"""

from dataclasses import dataclass
from enum import Enum, auto
from fractions import Fraction

__all__ = ['GameType', 'BetId', 'BetDefinition']


class GameType(Enum):
    """游戏类型"""
    COINS = auto()       # 3枚硬币
    DICE = auto()        # 2颗骰子
    FIRST_TWO = auto()   # 3张牌中的前两张


class BetId(Enum):
    """下注标识，值与对外的字符串标识一致"""
    # 硬币
    EXACT_HTH = "exact_hth"
    EXACT_THT = "exact_tht"
    EXACTLY_2_HEADS = "exactly_2_heads"
    EXACTLY_1_HEAD = "exactly_1_head"
    AT_LEAST_2_HEADS = "at_least_2_heads"
    FIRST_COIN_H = "first_coin_h"
    CONTAINS_HH = "contains_hh"
    # 骰子
    SUM_7 = "sum_7"
    DOUBLES = "doubles"
    SUM_GTE_10 = "sum_gte_10"
    AT_LEAST_ONE_6 = "at_least_one_6"
    ODD_SUM = "odd_sum"
    FIRST_GT_SECOND = "first_gt_second"
    SUM_4_OR_5 = "sum_4_or_5"
    # 两张牌
    PRODUCT_LT_50 = "product_lt_50"
    SUM_EVEN = "sum_even"
    DIFFERENT_COLORS = "different_colors"
    AT_LEAST_ONE_FACE = "at_least_one_face"

    @property
    def game(self) -> GameType:
        """该下注所属的游戏"""
        return _BET_GAMES[self]


_BET_GAMES = {
    BetId.EXACT_HTH: GameType.COINS,
    BetId.EXACT_THT: GameType.COINS,
    BetId.EXACTLY_2_HEADS: GameType.COINS,
    BetId.EXACTLY_1_HEAD: GameType.COINS,
    BetId.AT_LEAST_2_HEADS: GameType.COINS,
    BetId.FIRST_COIN_H: GameType.COINS,
    BetId.CONTAINS_HH: GameType.COINS,
    BetId.SUM_7: GameType.DICE,
    BetId.DOUBLES: GameType.DICE,
    BetId.SUM_GTE_10: GameType.DICE,
    BetId.AT_LEAST_ONE_6: GameType.DICE,
    BetId.ODD_SUM: GameType.DICE,
    BetId.FIRST_GT_SECOND: GameType.DICE,
    BetId.SUM_4_OR_5: GameType.DICE,
    BetId.PRODUCT_LT_50: GameType.FIRST_TWO,
    BetId.SUM_EVEN: GameType.FIRST_TWO,
    BetId.DIFFERENT_COLORS: GameType.FIRST_TWO,
    BetId.AT_LEAST_ONE_FACE: GameType.FIRST_TWO,
}


def require_complete(table: dict, table_name: str) -> None:
    """
    确保以BetId为键的分派表覆盖全部下注

    Raises:
        ValueError: 当有下注缺失或存在多余键时
    """
    missing = set(BetId) - set(table.keys())
    if missing:
        raise ValueError(f"{table_name}缺少下注: {sorted(b.value for b in missing)}")
    extra = set(table.keys()) - set(BetId)
    if extra:
        raise ValueError(f"{table_name}包含未知键: {extra}")


require_complete(_BET_GAMES, "游戏归属表")


@dataclass(frozen=True)
class BetDefinition:
    """
    不可变的下注定义

    Attributes:
        id: 下注标识
        game: 所属游戏
        probability: 精确获胜概率，区间(0, 1]
        label: 显示名称
    """
    id: BetId
    game: GameType
    probability: Fraction
    label: str

    def __post_init__(self):
        """验证下注定义的有效性"""
        if not isinstance(self.probability, Fraction):
            raise TypeError(f"probability必须是Fraction，实际: {type(self.probability)}")
        if not 0 < self.probability <= 1:
            raise ValueError(f"probability必须在(0, 1]内: {self.probability}")
        if self.id.game is not self.game:
            raise ValueError(f"下注{self.id.value}不属于{self.game.name}")
