"""
ylock - 基于 Redis 的分布式资源锁

提供持有者校验的加锁/解锁、托管锁自动续期、配置与日志等功能。

快速开始:
    import redis
    from ylock import LockManager, LockRefresher

    manager = LockManager(redis.Redis.from_url("redis://localhost:6379/0"))
    LockRefresher(manager).start()

    if manager.lock("report:daily", 3600):
        try:
            ...
        finally:
            manager.unlock("report:daily")
"""

from .version import __version__, __author__, __description__

from .locks import (
    LockStore,
    RedisLockStore,
    MemoryLockStore,
    MemoryLockTable,
    HoldRegistry,
    LockManager,
    LockRefresher,
    create_lock_store,
    create_lock_manager,
)

from .config import (
    AppSettings,
    RedisSettings,
    LockSettings,
    LoggingSettings,
    load_yaml_config,
)

from .log import setup_logger, setup_root_logger, get_logger

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # 锁
    "LockStore",
    "RedisLockStore",
    "MemoryLockStore",
    "MemoryLockTable",
    "HoldRegistry",
    "LockManager",
    "LockRefresher",
    "create_lock_store",
    "create_lock_manager",
    # 配置
    "AppSettings",
    "RedisSettings",
    "LockSettings",
    "LoggingSettings",
    "load_yaml_config",
    # 日志
    "setup_logger",
    "setup_root_logger",
    "get_logger",
]
