"""
Core Module - 纯领域逻辑层

该模块包含下注模拟的核心业务逻辑，遵循DDD原则。
核心模块只能依赖其他核心模块，不能依赖应用层。

Modules:
    rng: 可注入、可播种的随机源
    deck: 牌组管理和发牌逻辑
    outcome: 回合结果（硬币、骰子、三张牌）生成
    bets: 下注定义、精确概率表和谓词
    odds: 赔率倍数与偏置生成
    market: 三张牌点数和的买卖报价与头寸结算
    bank: 银行账本和资金流水
    state_machine: 回合状态机
    store: 游戏状态存储
    settlement: 回合结算引擎
    events: 领域事件系统
    invariant: 结算不变量检查
"""

from .exceptions import WagerGameError, InsufficientBankError, InvalidTransitionError

__all__ = [
    'WagerGameError',
    'InsufficientBankError',
    'InvalidTransitionError',
]
