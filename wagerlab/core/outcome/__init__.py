"""
回合结果模块

每回合为三个游戏各生成一次随机结果：3枚硬币序列、2颗骰子、无放回抽取的3张牌.
"""

from .types import CoinFace, Outcome
from .generator import OutcomeGenerator

__all__ = ['CoinFace', 'Outcome', 'OutcomeGenerator']
