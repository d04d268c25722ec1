"""分布式锁模块

提供基于 Redis 的资源锁：
- LockStore: 锁存储抽象（获取、释放、续期）
- RedisLockStore: Redis 实现，SET NX EX + Lua 脚本校验持有者
- MemoryLockStore: 内存实现（单实例/测试）
- LockManager: 键名前缀、默认超时与托管锁续期
- LockRefresher: 后台周期性续期
"""

from .base import LockStore
from .redis_lock import (
    RedisLockStore,
    MemoryLockStore,
    MemoryLockTable,
    RELEASE_SCRIPT,
    REFRESH_SCRIPT,
    create_lock_store,
    create_redis_client,
)
from .registry import HoldRegistry
from .manager import LockManager, create_lock_manager
from .refresher import LockRefresher

__all__ = [
    "LockStore",
    "RedisLockStore",
    "MemoryLockStore",
    "MemoryLockTable",
    "RELEASE_SCRIPT",
    "REFRESH_SCRIPT",
    "create_lock_store",
    "create_redis_client",
    "HoldRegistry",
    "LockManager",
    "create_lock_manager",
    "LockRefresher",
]
