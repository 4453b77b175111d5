"""
做市类型定义
"""

from dataclasses import dataclass
from enum import Enum

__all__ = ['TradeSide', 'MarketQuote', 'MarketPosition', 'MIN_CARD_SUM', 'MAX_CARD_SUM']

MIN_CARD_SUM = 3    # A+A+A
MAX_CARD_SUM = 39   # K+K+K


class TradeSide(Enum):
    """交易方向"""
    BUY = "BUY"
    SELL = "SELL"
    NONE = "NONE"


@dataclass(frozen=True)
class MarketQuote:
    """买卖报价，满足 3 <= bid < ask <= 39"""
    bid: int
    ask: int

    def __post_init__(self):
        if not MIN_CARD_SUM <= self.bid <= MAX_CARD_SUM:
            raise ValueError(f"bid必须在{MIN_CARD_SUM}-{MAX_CARD_SUM}之间: {self.bid}")
        if not MIN_CARD_SUM <= self.ask <= MAX_CARD_SUM:
            raise ValueError(f"ask必须在{MIN_CARD_SUM}-{MAX_CARD_SUM}之间: {self.ask}")
        if self.ask <= self.bid:
            raise ValueError(f"ask必须大于bid: bid={self.bid}, ask={self.ask}")

    @property
    def spread(self) -> int:
        return self.ask - self.bid


@dataclass(frozen=True)
class MarketPosition:
    """
    市场头寸

    每回合至多一个头寸，占用资金 committed = units * price 计入总敞口。
    """
    side: TradeSide = TradeSide.NONE
    units: int = 0
    price: int = 0

    def __post_init__(self):
        """验证头寸的有效性"""
        if self.units < 0:
            raise ValueError(f"units不能为负数: {self.units}")
        if self.price < 0:
            raise ValueError(f"price不能为负数: {self.price}")
        if self.side is TradeSide.NONE and (self.units or self.price):
            raise ValueError("空头寸不能带有units或price")

    @classmethod
    def empty(cls) -> 'MarketPosition':
        return cls()

    @property
    def is_open(self) -> bool:
        return self.side is not TradeSide.NONE

    @property
    def committed(self) -> int:
        """占用资金"""
        return self.units * self.price
