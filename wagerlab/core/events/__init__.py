"""
Events Module - 领域事件

Classes:
    DomainEvent: 领域事件基类
    EventBus: 事件总线
    EventHandler: 事件处理器协议

Functions:
    get_event_bus: 获取全局事件总线实例
    set_event_bus: 设置全局事件总线实例
    create_function_handler: 创建基于函数的事件处理器
"""

from .domain_events import EventType, DomainEvent
from .event_bus import (
    EventHandler,
    EventBus,
    get_event_bus,
    set_event_bus,
    create_function_handler,
)

__all__ = [
    "EventType",
    "DomainEvent",
    "EventHandler",
    "EventBus",
    "get_event_bus",
    "set_event_bus",
    "create_function_handler",
]
