"""
不变量检查模块

在写回状态之前验证结算结果，写回之后验证银行等式、提交不透支、报价范围、条款下限和历史上限。
"""

from .types import InvariantType, InvariantViolation, InvariantCheckResult, InvariantError
from .settlement_checker import SettlementInvariantChecker

__all__ = [
    'InvariantType',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError',
    'SettlementInvariantChecker',
]
