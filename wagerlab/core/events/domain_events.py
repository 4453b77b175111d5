"""
Domain Events - 领域事件定义
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum, auto
import time
import uuid


class EventType(Enum):
    """事件类型枚举"""
    # 回合生命周期
    ROUND_STARTED = auto()
    ROUND_SETTLED = auto()
    ROUND_ADVANCED = auto()
    GAME_RESET = auto()

    # 玩家输入
    STAKE_CHANGED = auto()
    MARKET_TRADE_PLACED = auto()
    MARKET_TRADE_CLEARED = auto()
    BANK_ADJUSTED = auto()

    # 刷新
    TERMS_REFRESHED = auto()
    QUOTES_REFRESHED = auto()

    # 错误
    COMMAND_REJECTED = auto()


@dataclass(frozen=True)
class DomainEvent:
    """
    领域事件

    Attributes:
        event_id: 事件唯一标识符
        event_type: 事件类型
        aggregate_id: 聚合根ID（游戏ID）
        timestamp: 事件发生时间戳
        data: 事件数据
        round_number: 事件发生时的回合编号
    """
    event_id: str
    event_type: EventType
    aggregate_id: str
    timestamp: float
    data: Dict[str, Any]
    round_number: int = 0
    correlation_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        event_type: EventType,
        aggregate_id: str,
        data: Dict[str, Any],
        round_number: int = 0,
        correlation_id: Optional[str] = None
    ) -> DomainEvent:
        """创建领域事件的工厂方法"""
        return cls(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            aggregate_id=aggregate_id,
            timestamp=time.time(),
            data=data,
            round_number=round_number,
            correlation_id=correlation_id
        )

    def to_dict(self) -> Dict[str, Any]:
        """将事件转换为字典格式"""
        return {
            'event_id': self.event_id,
            'event_type': self.event_type.name,
            'aggregate_id': self.aggregate_id,
            'timestamp': self.timestamp,
            'data': self.data,
            'round_number': self.round_number,
            'correlation_id': self.correlation_id
        }
