"""
牌组相关类型定义.

定义扑克牌的花色、点数枚举. 点数按A=1 ... K=13计.
"""

from enum import Enum, IntEnum
from typing import List


class Suit(Enum):
    """
    扑克牌花色枚举.

    红桃和方块为红色，梅花和黑桃为黑色.
    """

    HEARTS = "H"      # 红桃
    DIAMONDS = "D"    # 方块
    CLUBS = "C"       # 梅花
    SPADES = "S"      # 黑桃

    @property
    def is_red(self) -> bool:
        """是否为红色花色."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def symbol(self) -> str:
        """花色的Unicode符号."""
        return {"H": "♥", "D": "♦", "C": "♣", "S": "♠"}[self.value]


class Rank(IntEnum):
    """
    扑克牌点数枚举.

    A=1，J/Q/K分别为11/12/13，三张牌点数和的范围为3..39.
    """

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def is_face(self) -> bool:
        """是否为人头牌（J/Q/K）."""
        return self >= Rank.JACK


def get_all_suits() -> List[Suit]:
    """获取所有花色."""
    return list(Suit)


def get_all_ranks() -> List[Rank]:
    """获取所有点数."""
    return list(Rank)
