"""
不变量检查器类型定义
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import List, Dict, Any
import time

__all__ = [
    'InvariantType',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError'
]


class InvariantType(Enum):
    """不变量类型枚举"""
    BANK_CONSERVATION = auto()      # 结算等式
    COMMITMENT = auto()             # 提交不透支
    QUOTE_RANGE = auto()            # 报价范围
    TERMS_FLOOR = auto()            # 倍数下限
    HISTORY_BOUND = auto()          # 历史长度上限


@dataclass(frozen=True)
class InvariantViolation:
    """不变量违反记录"""
    invariant_type: InvariantType
    description: str
    severity: str  # 'CRITICAL', 'WARNING'
    context: Dict[str, Any]

    def __post_init__(self):
        if not self.description:
            raise ValueError("description不能为空")
        if self.severity not in ['CRITICAL', 'WARNING']:
            raise ValueError("severity必须是CRITICAL或WARNING之一")


@dataclass(frozen=True)
class InvariantCheckResult:
    """不变量检查结果"""
    invariant_type: InvariantType
    is_valid: bool
    violations: List[InvariantViolation]
    timestamp: float

    def __post_init__(self):
        if not self.is_valid and len(self.violations) == 0:
            raise ValueError("检查失败时必须提供违反记录")

    @classmethod
    def from_violations(cls, invariant_type: InvariantType,
                        violations: List[InvariantViolation]) -> 'InvariantCheckResult':
        """根据违反记录创建检查结果"""
        return cls(
            invariant_type=invariant_type,
            is_valid=not violations,
            violations=list(violations),
            timestamp=time.time()
        )


class InvariantError(Exception):
    """不变量错误异常"""

    def __init__(self, message: str, violations: List[InvariantViolation]):
        super().__init__(message)
        self.violations = violations

    def get_critical_violations(self) -> List[InvariantViolation]:
        """获取严重违反记录"""
        return [v for v in self.violations if v.severity == 'CRITICAL']
