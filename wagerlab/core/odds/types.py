"""
赔率类型定义
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

__all__ = ['Bias', 'BiasRange', 'Terms', 'BIAS_RANGES', 'BIAS_WEIGHTS', 'MIN_MULTIPLIER']

MIN_MULTIPLIER = 1.1


class Bias(Enum):
    """偏置类别"""
    FAIR = "fair"       # 公平
    HOUSE = "house"     # 对庄家有利
    PLAYER = "player"   # 对玩家有利


@dataclass(frozen=True)
class BiasRange:
    """偏置扰动因子的均匀抽样区间"""
    low: float
    high: float

    def __post_init__(self):
        if self.low <= 0 or self.high < self.low:
            raise ValueError(f"无效的扰动区间: [{self.low}, {self.high}]")


BIAS_RANGES: Dict[Bias, BiasRange] = {
    Bias.FAIR: BiasRange(0.98, 1.02),
    Bias.HOUSE: BiasRange(0.80, 0.95),
    Bias.PLAYER: BiasRange(1.05, 1.25),
}

BIAS_WEIGHTS: Dict[Bias, float] = {
    Bias.FAIR: 0.45,
    Bias.HOUSE: 0.35,
    Bias.PLAYER: 0.20,
}


@dataclass(frozen=True)
class Terms:
    """
    单个下注在当前回合的条款

    每回合开始时重新生成，回合中途从不修改。
    """
    multiplier: float
    bias: Bias

    def __post_init__(self):
        """验证条款的有效性"""
        if not isinstance(self.bias, Bias):
            raise TypeError(f"bias必须是Bias类型，实际: {type(self.bias)}")
        if self.multiplier < MIN_MULTIPLIER:
            raise ValueError(f"multiplier不能小于{MIN_MULTIPLIER}: {self.multiplier}")
