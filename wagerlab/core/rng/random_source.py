"""
可注入的随机源.

包装random.Random，所有生成器都通过构造参数接收它，以支持确定性测试.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')

__all__ = ['RandomSource']


class RandomSource:
    """
    均匀与加权抽样原语.

    Examples:
        >>> source = RandomSource(seed=42)
        >>> 1 <= source.randint(1, 6) <= 6
        True
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        """
        初始化随机源.

        Args:
            rng: 随机数生成器。如果为None，按seed新建
            seed: 随机种子，仅在rng为None时使用
        """
        self._rng = rng or random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """返回闭区间[low, high]内的均匀整数."""
        if low > high:
            raise ValueError(f"下界不能大于上界: {low} > {high}")
        return self._rng.randint(low, high)

    def uniform(self, low: float, high: float) -> float:
        """返回[low, high]内的均匀浮点数."""
        return self._rng.uniform(low, high)

    def random(self) -> float:
        """返回[0, 1)内的均匀浮点数."""
        return self._rng.random()

    def choice(self, items: Sequence[T]) -> T:
        """均匀选择一个元素."""
        if not items:
            raise ValueError("不能从空序列中选择")
        return self._rng.choice(items)

    def weighted_choice(self, choices: Sequence[T], weights: Sequence[float]) -> T:
        """
        按权重选择一个元素.

        Args:
            choices: 候选元素
            weights: 与候选一一对应的非负权重

        Returns:
            被选中的元素

        Raises:
            ValueError: 长度不一致、权重为负或权重和为0时
        """
        if len(choices) != len(weights):
            raise ValueError("choices和weights的长度必须相同")
        if not choices:
            raise ValueError("不能从空序列中选择")
        if any(w < 0 for w in weights):
            raise ValueError("权重不能为负数")
        if sum(weights) <= 0:
            raise ValueError("权重总和必须为正数")
        return self._rng.choices(list(choices), weights=list(weights), k=1)[0]

    def shuffle(self, items: List[T]) -> None:
        """原地洗牌（Fisher-Yates）."""
        self._rng.shuffle(items)
