"""
回合结果生成器

每次调用generate()独立抽样三个游戏的结果，所有随机性来自注入的随机源。
"""

from typing import Optional, Tuple

from ..deck import Card, Deck
from ..rng import RandomSource
from .types import CoinFace, Outcome

__all__ = ['OutcomeGenerator']


class OutcomeGenerator:
    """结果生成器"""

    def __init__(self, random_source: Optional[RandomSource] = None):
        self._random = random_source or RandomSource()

    def flip_coins(self, count: int = 3) -> Tuple[CoinFace, ...]:
        """抛count枚公平硬币"""
        return tuple(
            CoinFace.HEADS if self._random.random() < 0.5 else CoinFace.TAILS
            for _ in range(count)
        )

    def roll_dice(self) -> Tuple[int, int]:
        """掷两颗公平骰子"""
        return self._random.randint(1, 6), self._random.randint(1, 6)

    def draw_cards(self, count: int = 3) -> Tuple[Card, ...]:
        """从新洗的52张牌中无放回抽取count张"""
        deck = Deck(self._random)
        deck.shuffle()
        return tuple(deck.deal_cards(count))

    def generate(self) -> Outcome:
        """生成一个完整的回合结果"""
        return Outcome(
            coins=self.flip_coins(3),
            dice=self.roll_dice(),
            cards=self.draw_cards(3),
        )
