"""
银行账本

持有唯一的银行余额，所有余额变化都经由账本并留下流水。
赌注扣除在提交前验证，余额永远不会因扣除而变为负数。
"""

from typing import Dict, List, Optional, Any
from dataclasses import dataclass
import threading
import time

from ..exceptions import InsufficientBankError
from .bank_transaction import BankTransaction, TransactionType

__all__ = ['BankLedger', 'BankLedgerSnapshot']


@dataclass(frozen=True)
class BankLedgerSnapshot:
    """银行账本快照"""
    balance: int
    initial_balance: int
    transaction_count: int
    timestamp: float

    @property
    def net_change(self) -> int:
        """相对初始余额的净变化"""
        return self.balance - self.initial_balance


class BankLedger:
    """
    银行账本

    确保所有资金操作的原子性和一致性。
    """

    def __init__(self, initial_balance: int = 1000):
        """
        初始化银行账本

        Args:
            initial_balance: 初始余额
        """
        if initial_balance < 0:
            raise ValueError(f"初始余额不能为负数: {initial_balance}")
        self._initial_balance = initial_balance
        self._balance = initial_balance
        self._transaction_history: List[BankTransaction] = []
        self._lock = threading.RLock()

    @property
    def balance(self) -> int:
        """当前余额"""
        with self._lock:
            return self._balance

    @property
    def initial_balance(self) -> int:
        return self._initial_balance

    def can_afford(self, amount: int) -> bool:
        """余额是否足以支付amount，零总是可以支付"""
        with self._lock:
            return amount <= 0 or amount <= self._balance

    def commit(self, amount: int, round_number: Optional[int] = None,
               description: str = "") -> BankTransaction:
        """
        扣除回合总赌注

        Args:
            amount: 扣除数量，非负
            round_number: 回合编号

        Raises:
            ValueError: amount为负数时
            InsufficientBankError: 余额不足时，余额不变
        """
        if amount < 0:
            raise ValueError("扣除数量不能为负数")

        with self._lock:
            if not self.can_afford(amount):
                raise InsufficientBankError(
                    f"余额不足: 需要{amount}，可用{self._balance}",
                    required=amount,
                    available=self._balance,
                )
            self._balance -= amount
            return self._record(TransactionType.COMMIT, -amount, description, round_number)

    def credit(self, amount: int, round_number: Optional[int] = None,
               description: str = "", metadata: Optional[Dict[str, Any]] = None) -> BankTransaction:
        """
        结算入账

        amount可以为负（市场亏损超过返还的占用资金时），结算后余额由调用方的不变量检查保证。
        """
        with self._lock:
            self._balance += amount
            return self._record(TransactionType.CREDIT, amount, description, round_number, metadata)

    def adjust(self, delta: int, description: str = "") -> BankTransaction:
        """
        外部调整余额

        正的delta总是被接受，余额为负时可以分多次补回。

        Raises:
            InsufficientBankError: 负的delta使余额低于0时，余额不变；
                required为缺口
        """
        with self._lock:
            if delta < 0 and self._balance + delta < 0:
                raise InsufficientBankError(
                    f"调整后余额不能为负数: {self._balance} + ({delta})",
                    required=-(self._balance + delta),
                    available=self._balance,
                )
            self._balance += delta
            return self._record(TransactionType.ADJUST, delta, description)

    def reset(self) -> BankTransaction:
        """重置到初始余额并清空流水"""
        with self._lock:
            delta = self._initial_balance - self._balance
            self._balance = self._initial_balance
            self._transaction_history.clear()
            return self._record(TransactionType.RESET, delta, "重置银行")

    def create_snapshot(self) -> BankLedgerSnapshot:
        """创建当前状态的快照"""
        with self._lock:
            return BankLedgerSnapshot(
                balance=self._balance,
                initial_balance=self._initial_balance,
                transaction_count=len(self._transaction_history),
                timestamp=time.time(),
            )

    def get_transaction_history(self, transaction_type: Optional[TransactionType] = None) -> List[BankTransaction]:
        """
        获取流水历史

        Args:
            transaction_type: 可选，只获取特定类型的流水
        """
        with self._lock:
            if transaction_type is None:
                return self._transaction_history.copy()
            return [t for t in self._transaction_history if t.transaction_type is transaction_type]

    def _record(self, transaction_type: TransactionType, amount: int, description: str,
                round_number: Optional[int] = None,
                metadata: Optional[Dict[str, Any]] = None) -> BankTransaction:
        transaction = BankTransaction.create(
            transaction_type=transaction_type,
            amount=amount,
            balance_after=self._balance,
            sequence=len(self._transaction_history),
            description=description,
            round_number=round_number,
            metadata=metadata,
        )
        self._transaction_history.append(transaction)
        return transaction
