"""
随机源模块

提供均匀整数/浮点抽样与加权类别选择，是所有生成器的叶子依赖.
"""

from .random_source import RandomSource

__all__ = ['RandomSource']
