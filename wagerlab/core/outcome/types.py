"""
回合结果类型定义
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..deck import Card

__all__ = ['CoinFace', 'Outcome']


class CoinFace(Enum):
    """硬币面"""
    HEADS = "H"
    TAILS = "T"


@dataclass(frozen=True)
class Outcome:
    """
    一个回合的实现结果

    结算时创建一次，存入回合历史，此后不可变。

    Attributes:
        coins: 3枚硬币的序列
        dice: 两颗骰子的点数
        cards: 无放回抽取的3张不同的牌，前两张用于两张牌游戏
    """
    coins: Tuple[CoinFace, ...]
    dice: Tuple[int, int]
    cards: Tuple[Card, ...]

    def __post_init__(self):
        """验证结果的有效性"""
        if len(self.coins) != 3:
            raise ValueError(f"硬币序列长度必须为3，实际: {len(self.coins)}")
        if not all(isinstance(c, CoinFace) for c in self.coins):
            raise TypeError("硬币序列只能包含CoinFace")
        if len(self.dice) != 2:
            raise ValueError(f"骰子数量必须为2，实际: {len(self.dice)}")
        for die in self.dice:
            if not 1 <= die <= 6:
                raise ValueError(f"骰子点数必须在1-6之间，实际: {die}")
        if len(self.cards) != 3:
            raise ValueError(f"牌数必须为3，实际: {len(self.cards)}")
        if len(set(self.cards)) != 3:
            raise ValueError("三张牌必须互不相同")

    @classmethod
    def from_strings(cls, coins: str, dice: Tuple[int, int], cards: str) -> 'Outcome':
        """
        从紧凑字符串创建结果，如 Outcome.from_strings("HHT", (3, 4), "AH KS 10D")
        """
        return cls(
            coins=tuple(CoinFace(c) for c in coins.upper()),
            dice=(int(dice[0]), int(dice[1])),
            cards=tuple(Card.from_str(c) for c in cards.split()),
        )

    @property
    def coin_string(self) -> str:
        """硬币序列字符串，如"HTH" """
        return "".join(c.value for c in self.coins)

    @property
    def heads(self) -> int:
        """正面数量"""
        return sum(1 for c in self.coins if c is CoinFace.HEADS)

    @property
    def dice_sum(self) -> int:
        return self.dice[0] + self.dice[1]

    @property
    def first_two(self) -> Tuple[Card, Card]:
        """两张牌游戏使用的前两张牌（有序）"""
        return self.cards[0], self.cards[1]

    @property
    def card_sum(self) -> int:
        """三张牌点数和，范围3..39"""
        return sum(card.rank.value for card in self.cards)
