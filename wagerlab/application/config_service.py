"""
ConfigService - 配置管理服务

集中管理游戏规则和日志配置，每类配置按profile组织：
- 游戏规则：初始余额、历史上限、初始报价、随机种子
- 日志：级别、格式、控制台/文件输出

为Application层提供统一的配置查询接口，查询结果以QueryResult返回。
"""

import logging
import logging.handlers
import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.market import MIN_CARD_SUM, MAX_CARD_SUM
from .types import QueryResult

__all__ = [
    'ConfigType',
    'GameRulesConfig',
    'LoggingConfig',
    'ConfigService',
    'get_config_service',
]

ROOT_LOGGER_NAME = "wagerlab"


class ConfigType(Enum):
    """配置类型枚举"""
    GAME_RULES = "game_rules"
    LOGGING = "logging"


@dataclass
class GameRulesConfig:
    """游戏规则配置"""
    initial_bank: int = 1000
    history_limit: int = 80
    default_bid: int = 21
    default_ask: int = 23
    seed: Optional[int] = None  # None表示不可复现的随机源

    def __post_init__(self):
        """验证规则配置"""
        if self.initial_bank < 0:
            raise ValueError(f"初始余额不能为负数: {self.initial_bank}")
        if self.history_limit <= 0:
            raise ValueError(f"历史上限必须为正数: {self.history_limit}")
        if not MIN_CARD_SUM <= self.default_bid < self.default_ask <= MAX_CARD_SUM:
            raise ValueError(
                f"初始报价必须满足{MIN_CARD_SUM} <= bid < ask <= {MAX_CARD_SUM}: "
                f"bid={self.default_bid}, ask={self.default_ask}"
            )


@dataclass
class LoggingConfig:
    """日志配置"""
    log_level: str = 'INFO'
    enable_file_logging: bool = False
    log_file_path: str = "logs/wagerlab.log"
    enable_console_logging: bool = True
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    max_log_file_size_mb: int = 10
    backup_count: int = 5

    def __post_init__(self):
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"未知的日志级别: {self.log_level}")


class ConfigService:
    """配置管理服务"""

    def __init__(self):
        """初始化配置服务"""
        self.logger = logging.getLogger(__name__)
        self._configs: Dict[ConfigType, Dict[str, Any]] = {}
        self._installed_handlers: List[logging.Handler] = []
        self._load_default_configs()

    def _load_default_configs(self):
        """加载默认配置"""
        self._configs[ConfigType.GAME_RULES] = {
            'default': GameRulesConfig(),
            'high_roller': GameRulesConfig(initial_bank=10000),
            'deterministic': GameRulesConfig(seed=42),
        }

        self._configs[ConfigType.LOGGING] = {
            'default': LoggingConfig(),
            'debug': LoggingConfig(
                log_level='DEBUG',
                enable_file_logging=True
            ),
            'production': LoggingConfig(
                log_level='WARNING',
                enable_console_logging=False
            ),
        }

        self.logger.info("默认配置加载完成")

    def _get_profile(self, config_type: ConfigType, profile: str, default_factory):
        config_profiles = self._configs.get(config_type, {})
        if profile not in config_profiles:
            self.logger.warning(f"未找到{config_type.value}配置 '{profile}'，使用默认配置")
            profile = "default"
        return config_profiles.get(profile, default_factory())

    def get_game_rules_config(self, profile: str = "default") -> QueryResult[GameRulesConfig]:
        """
        获取游戏规则配置

        Args:
            profile: 配置文件名 (default, high_roller, deterministic)

        Returns:
            查询结果，包含游戏规则配置
        """
        return QueryResult.success_result(
            self._get_profile(ConfigType.GAME_RULES, profile, GameRulesConfig)
        )

    def get_logging_config(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        """
        获取日志配置

        Args:
            profile: 配置文件名 (default, debug, production)

        Returns:
            查询结果，包含日志配置
        """
        return QueryResult.success_result(
            self._get_profile(ConfigType.LOGGING, profile, LoggingConfig)
        )

    def get_merged_config(self, config_type: ConfigType, profile: str = "default") -> QueryResult[Dict[str, Any]]:
        """
        获取配置字典

        Args:
            config_type: 配置类型
            profile: 配置文件名
        """
        if config_type == ConfigType.GAME_RULES:
            return QueryResult.success_result(self.get_game_rules_config(profile).data.__dict__.copy())
        if config_type == ConfigType.LOGGING:
            return QueryResult.success_result(self.get_logging_config(profile).data.__dict__.copy())
        return QueryResult.failure_result(
            f"不支持的配置类型: {config_type}",
            error_code="UNSUPPORTED_CONFIG_TYPE"
        )

    def update_config(self, config_type: ConfigType, profile: str, updates: Dict[str, Any]) -> QueryResult[bool]:
        """
        更新配置

        只更新已存在的配置项；更新后的配置重新经过验证，验证失败时原配置不变。

        Args:
            config_type: 配置类型
            profile: 配置文件名
            updates: 更新的配置项

        Returns:
            查询结果，包含更新是否成功
        """
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )

        config_profiles = self._configs[config_type]
        if profile not in config_profiles:
            return QueryResult.failure_result(
                f"配置文件 {profile} 不存在",
                error_code="CONFIG_PROFILE_NOT_FOUND"
            )

        current_config = config_profiles[profile]
        known = {f.name for f in fields(current_config)}
        valid_updates = {}
        for key, value in updates.items():
            if key in known:
                valid_updates[key] = value
            else:
                self.logger.warning(f"配置项 {key} 不存在于 {config_type.value}.{profile} 中")

        try:
            config_profiles[profile] = replace(current_config, **valid_updates)
        except (TypeError, ValueError, AttributeError) as e:
            return QueryResult.validation_error(
                f"更新配置失败: {e}",
                error_code="INVALID_CONFIG_VALUE"
            )

        self.logger.info(f"配置 {config_type.value}.{profile} 更新成功")
        return QueryResult.success_result(True)

    def list_available_profiles(self, config_type: ConfigType) -> QueryResult[List[str]]:
        """列出可用的配置文件"""
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )
        return QueryResult.success_result(list(self._configs[config_type].keys()))

    def configure_logging(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        """
        按日志配置设置wagerlab根日志器

        重复调用时先移除上一次安装的处理器。

        Returns:
            查询结果，包含应用的日志配置
        """
        config = self.get_logging_config(profile).data
        root = logging.getLogger(ROOT_LOGGER_NAME)

        for handler in self._installed_handlers:
            root.removeHandler(handler)
            handler.close()
        self._installed_handlers = []

        formatter = logging.Formatter(config.log_format)
        if config.enable_console_logging:
            self._installed_handlers.append(logging.StreamHandler())
        if config.enable_file_logging:
            log_dir = os.path.dirname(config.log_file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            self._installed_handlers.append(logging.handlers.RotatingFileHandler(
                config.log_file_path,
                maxBytes=config.max_log_file_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding='utf-8',
            ))

        for handler in self._installed_handlers:
            handler.setFormatter(formatter)
            root.addHandler(handler)
        root.setLevel(config.log_level.upper())

        self.logger.info(f"日志配置 '{profile}' 已应用，级别 {config.log_level}")
        return QueryResult.success_result(config)


# 全局单例
_config_service_instance: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """
    获取配置服务的全局单例

    Returns:
        ConfigService: 配置服务实例
    """
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance
