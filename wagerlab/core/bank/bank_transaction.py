"""
银行流水记录

定义资金流水的类型和记录结构。
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Dict, Any
import time

__all__ = ['TransactionType', 'BankTransaction']


class TransactionType(Enum):
    """银行流水类型"""
    COMMIT = auto()     # 回合开始时扣除全部赌注与市场占用资金
    CREDIT = auto()     # 结算入账（奖金 + 市场盈亏 + 返还的占用资金）
    ADJUST = auto()     # 外部调整
    RESET = auto()      # 重置到初始余额


@dataclass(frozen=True)
class BankTransaction:
    """银行流水记录，amount为带符号的余额变化"""
    transaction_id: str
    transaction_type: TransactionType
    amount: int
    balance_after: int
    timestamp: float
    description: str = ""
    round_number: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        """验证流水记录的有效性"""
        if not self.transaction_id:
            raise ValueError("transaction_id不能为空")
        if self.timestamp <= 0:
            raise ValueError("timestamp必须为正数")

    @classmethod
    def create(cls, transaction_type: TransactionType, amount: int, balance_after: int,
               sequence: int, description: str = "",
               round_number: Optional[int] = None,
               metadata: Optional[Dict[str, Any]] = None) -> 'BankTransaction':
        """创建流水记录"""
        return cls(
            transaction_id=f"{transaction_type.name.lower()}_{sequence}",
            transaction_type=transaction_type,
            amount=amount,
            balance_after=balance_after,
            timestamp=time.time(),
            description=description,
            round_number=round_number,
            metadata=metadata,
        )
