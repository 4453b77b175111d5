"""
赔率生成器

每个下注、每个回合独立抽样，旧回合的条款绝不用于结算新结果。
"""

import logging
import math
from fractions import Fraction
from typing import Dict, Optional, Union

from ..bets import BetId, probability_of
from ..rng import RandomSource
from .types import Bias, Terms, BIAS_RANGES, BIAS_WEIGHTS, MIN_MULTIPLIER

__all__ = ['OddsGenerator', 'round_half_up']

Probability = Union[Fraction, float]


def round_half_up(value: float, digits: int = 0) -> float:
    """按half-up规则保留digits位小数"""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


class OddsGenerator:
    """赔率生成器"""

    def __init__(self, random_source: Optional[RandomSource] = None):
        self._random = random_source or RandomSource()
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def fair_multiplier(probability: Probability) -> float:
        """
        保本倍数: max(1.1, 1/p)

        Args:
            probability: 区间(0, 1]内的概率

        Raises:
            ValueError: 概率不在(0, 1]内时
        """
        if not 0 < probability <= 1:
            raise ValueError(f"概率必须在(0, 1]内: {probability}")
        return max(MIN_MULTIPLIER, 1 / float(probability))

    def generate_bias(self) -> Bias:
        """按固定类别分布抽样偏置"""
        choices = list(BIAS_WEIGHTS.keys())
        weights = [BIAS_WEIGHTS[b] for b in choices]
        return self._random.weighted_choice(choices, weights)

    def bias_multiplier(self, fair_base: float, bias: Bias) -> float:
        """在偏置区间内抽样扰动因子，并保留一位小数"""
        bias_range = BIAS_RANGES[bias]
        factor = self._random.uniform(bias_range.low, bias_range.high)
        return max(MIN_MULTIPLIER, round_half_up(fair_base * factor, 1))

    def generate_terms(self, probability: Probability) -> Terms:
        """为一个概率生成本回合的条款"""
        bias = self.generate_bias()
        multiplier = self.bias_multiplier(self.fair_multiplier(probability), bias)
        return Terms(multiplier=multiplier, bias=bias)

    def generate_all_terms(self) -> Dict[BetId, Terms]:
        """为全部18个下注独立生成条款"""
        terms = {bet_id: self.generate_terms(probability_of(bet_id)) for bet_id in BetId}
        self._logger.debug("已为%d个下注生成新条款", len(terms))
        return terms
