"""
下注游戏业务异常定义

所有核心异常都是同步、可恢复的，只影响触发它的那一条命令。
抛出异常时状态存储不发生任何变化。
"""

from typing import Optional


class WagerGameError(Exception):
    """下注游戏基础异常类"""
    pass


class InsufficientBankError(WagerGameError):
    """银行余额不足异常"""

    def __init__(self, message: str, required: int = 0, available: int = 0):
        super().__init__(message)
        self.required = required
        self.available = available


class InvalidTransitionError(WagerGameError):
    """当前回合阶段不允许该命令"""

    def __init__(self, message: str, phase: Optional[str] = None, command: Optional[str] = None):
        super().__init__(message)
        self.phase = phase
        self.command = command
