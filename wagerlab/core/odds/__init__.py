"""
赔率生成模块

把下注的真实概率转换为保本倍数，再按随机偏置类别扰动，得到本回合的倍数。
"""

from .types import Bias, BiasRange, Terms, BIAS_RANGES, BIAS_WEIGHTS, MIN_MULTIPLIER
from .generator import OddsGenerator, round_half_up

__all__ = [
    'Bias',
    'BiasRange',
    'Terms',
    'BIAS_RANGES',
    'BIAS_WEIGHTS',
    'MIN_MULTIPLIER',
    'OddsGenerator',
    'round_half_up',
]
