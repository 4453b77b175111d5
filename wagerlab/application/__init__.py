"""
Application Layer - 应用服务层

该层实现CQRS模式，包含命令服务和查询服务。
应用层可以访问核心层，但不能被核心层访问。

Services:
    GameCommandService: 游戏命令服务（状态变更操作）
    GameQueryService: 游戏查询服务（只读操作）
    ConfigService: 配置管理服务

Types:
    CommandResult: 命令执行结果
    QueryResult: 查询结果
    GameStateSnapshot: 游戏状态快照
    BetView: 下注表行
"""

from .types import (
    ResultStatus,
    CommandResult,
    QueryResult,
    ApplicationError,
)

from .config_service import (
    ConfigType,
    GameRulesConfig,
    LoggingConfig,
    ConfigService,
    get_config_service,
)
from .dto import StakeInput, TradeInput, BankAdjustmentInput
from .command_service import GameCommandService
from .query_service import GameQueryService, GameStateSnapshot, BetView

__all__ = [
    # 类型
    "ResultStatus",
    "CommandResult",
    "QueryResult",
    "ApplicationError",

    # 配置
    "ConfigType",
    "GameRulesConfig",
    "LoggingConfig",
    "ConfigService",
    "get_config_service",

    # 输入
    "StakeInput",
    "TradeInput",
    "BankAdjustmentInput",

    # 服务
    "GameCommandService",
    "GameQueryService",

    # 数据类
    "GameStateSnapshot",
    "BetView",
]
