"""
银行管理模块

提供单一共享银行余额的账本与资金流水记录。
"""

from .bank_ledger import BankLedger, BankLedgerSnapshot
from .bank_transaction import BankTransaction, TransactionType

__all__ = [
    'BankLedger',
    'BankLedgerSnapshot',
    'BankTransaction',
    'TransactionType',
]
