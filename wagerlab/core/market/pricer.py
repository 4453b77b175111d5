"""
做市报价器

公允值为三个独立均匀整数[1,13]之和；点差为[2,4]内的整数；
有25%的概率向公允值已经偏向的一侧推移一个单位。
"""

import logging
from typing import Optional

from ..rng import RandomSource
from .types import TradeSide, MarketQuote, MarketPosition, MIN_CARD_SUM, MAX_CARD_SUM

__all__ = ['MarketPricer']

CENTER_VALUE = 21
EDGE_PROBABILITY = 0.25


class MarketPricer:
    """做市报价器"""

    def __init__(self, random_source: Optional[RandomSource] = None):
        self._random = random_source or RandomSource()
        self._logger = logging.getLogger(__name__)

    def generate_quotes(self) -> MarketQuote:
        """
        生成一组买卖报价

        Returns:
            满足 3 <= bid < ask <= 39 的报价
        """
        fair_value = sum(self._random.randint(1, 13) for _ in range(3))
        spread = self._random.randint(2, 4)

        bid = fair_value - spread // 2
        ask = fair_value + (spread + 1) // 2

        if self._random.random() < EDGE_PROBABILITY:
            if fair_value > CENTER_VALUE:
                bid += 1  # 有利于SELL
            elif fair_value < CENTER_VALUE:
                ask -= 1  # 有利于BUY
            elif self._random.random() < 0.5:
                ask -= 1
            else:
                bid += 1

        # bid的上限留出一个单位给ask
        bid = max(MIN_CARD_SUM, min(MAX_CARD_SUM - 1, bid))
        ask = max(bid + 1, min(MAX_CARD_SUM, ask))

        self._logger.debug("生成报价: fair=%d spread=%d bid=%d ask=%d", fair_value, spread, bid, ask)
        return MarketQuote(bid=bid, ask=ask)

    @staticmethod
    def price_for(side: TradeSide, quote: MarketQuote) -> int:
        """BUY按ask成交，SELL按bid成交"""
        if side is TradeSide.BUY:
            return quote.ask
        if side is TradeSide.SELL:
            return quote.bid
        raise ValueError(f"无法为{side.name}定价")

    @staticmethod
    def settle(position: MarketPosition, realized_sum: int) -> int:
        """
        按实现的三张牌点数和结算头寸

        Returns:
            头寸盈亏，无头寸时为0
        """
        if position.side is TradeSide.BUY:
            return position.units * (realized_sum - position.price)
        if position.side is TradeSide.SELL:
            return position.units * (position.price - realized_sum)
        return 0
