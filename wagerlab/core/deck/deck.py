"""
扑克牌组管理.

定义Deck类，提供标准52张牌的洗牌、无放回发牌操作.
"""

from typing import List, Optional

from ..rng import RandomSource
from .card import Card
from .types import get_all_suits, get_all_ranks


class Deck:
    """
    表示一副扑克牌.

    使用注入的随机源洗牌以支持确定性测试.

    Examples:
        >>> deck = Deck(RandomSource(seed=1))
        >>> deck.shuffle()
        >>> len(deck.deal_cards(3))
        3
        >>> len(deck)
        49
    """

    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        self._random = random_source or RandomSource()
        self._cards: List[Card] = []
        self.reset()

    def reset(self) -> None:
        """重置牌组为完整的52张牌."""
        self._cards = [
            Card(suit, rank)
            for suit in get_all_suits()
            for rank in get_all_ranks()
        ]

    def shuffle(self) -> None:
        """洗牌."""
        self._random.shuffle(self._cards)

    def deal_card(self) -> Card:
        """
        发一张牌.

        Raises:
            IndexError: 当牌组为空时
        """
        if not self._cards:
            raise IndexError("Cannot deal from empty deck")
        return self._cards.pop()

    def deal_cards(self, count: int) -> List[Card]:
        """
        发多张牌（无放回）.

        Raises:
            ValueError: 当count为负数时
            IndexError: 当牌组中的牌不足时
        """
        if count < 0:
            raise ValueError("Count must be non-negative")
        if count > len(self._cards):
            raise IndexError(f"Cannot deal {count} cards, only {len(self._cards)} remaining")
        return [self.deal_card() for _ in range(count)]

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck(cards_remaining={len(self._cards)})"
