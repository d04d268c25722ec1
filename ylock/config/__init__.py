"""配置模块

提供配置管理功能：
- AppSettings: 应用配置，聚合以下子配置
- RedisSettings, LockSettings, LoggingSettings
- ConfigLoader / load_yaml_config: YAML 配置加载

快速开始:
    from ylock.config import AppSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)
"""

from .settings import (
    AppSettings,
    RedisSettings,
    LockSettings,
    LoggingSettings,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    "AppSettings",
    "RedisSettings",
    "LockSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_yaml_config",
]
