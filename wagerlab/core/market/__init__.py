"""
做市模块

围绕三张牌点数和的模拟公允值生成买卖报价，并结算唯一的未平仓头寸。
"""

from .types import TradeSide, MarketQuote, MarketPosition, MIN_CARD_SUM, MAX_CARD_SUM
from .pricer import MarketPricer

__all__ = [
    'TradeSide',
    'MarketQuote',
    'MarketPosition',
    'MarketPricer',
    'MIN_CARD_SUM',
    'MAX_CARD_SUM',
]
