"""
扑克牌数据结构.

定义不可变的Card类.
"""

from dataclasses import dataclass
from typing import Dict

from .types import Suit, Rank


_RANK_TEXT: Dict[Rank, str] = {
    Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K",
}


@dataclass(frozen=True)
class Card:
    """
    表示一张扑克牌.

    Attributes:
        suit: 花色
        rank: 点数

    Examples:
        >>> card = Card(Suit.HEARTS, Rank.ACE)
        >>> str(card)
        'AH'
        >>> card.rank.value
        1
    """

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        """
        验证扑克牌数据的有效性.

        Raises:
            TypeError: 当花色或点数类型无效时
        """
        if not isinstance(self.suit, Suit):
            raise TypeError(f"花色必须是Suit类型，实际: {type(self.suit)}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"点数必须是Rank类型，实际: {type(self.rank)}")

    @property
    def is_red(self) -> bool:
        """是否为红色牌."""
        return self.suit.is_red

    @property
    def rank_text(self) -> str:
        """点数的显示文本，A/J/Q/K或数字."""
        return _RANK_TEXT.get(self.rank, str(self.rank.value))

    def __str__(self) -> str:
        return f"{self.rank_text}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @classmethod
    def from_str(cls, card_str: str) -> 'Card':
        """
        从字符串创建扑克牌对象.

        Args:
            card_str: 格式为"点数花色"，如"AH"、"10d"、"Ts"

        Returns:
            Card: 对应的扑克牌对象

        Raises:
            TypeError: 输入不是字符串时
            ValueError: 当字符串格式无效时
        """
        if not isinstance(card_str, str):
            raise TypeError(f"输入必须是字符串，实际: {type(card_str)}")
        if len(card_str) < 2:
            raise ValueError(f"卡牌字符串格式错误: {card_str}")

        if card_str.startswith("10"):
            rank_str, suit_str = "10", card_str[2:]
        else:
            rank_str, suit_str = card_str[0], card_str[1:]

        rank_map: Dict[str, Rank] = {
            "A": Rank.ACE, "2": Rank.TWO, "3": Rank.THREE, "4": Rank.FOUR,
            "5": Rank.FIVE, "6": Rank.SIX, "7": Rank.SEVEN, "8": Rank.EIGHT,
            "9": Rank.NINE, "10": Rank.TEN, "T": Rank.TEN, "J": Rank.JACK,
            "Q": Rank.QUEEN, "K": Rank.KING,
        }
        suit_key = suit_str.upper()

        if rank_str.upper() not in rank_map:
            raise ValueError(f"无效的点数: {rank_str}")
        if suit_key not in {s.value for s in Suit}:
            raise ValueError(f"无效的花色: {suit_str}")

        return cls(Suit(suit_key), rank_map[rank_str.upper()])
