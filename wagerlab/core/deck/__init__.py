"""
牌组管理模块.

提供Card和Deck类，实现52张扑克牌的基本操作.
"""

from .card import Card
from .deck import Deck
from .types import Suit, Rank

__all__ = ['Card', 'Deck', 'Suit', 'Rank']
