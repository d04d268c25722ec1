"""Redis 锁存储

使用 Redis SET NX EX 获取锁，使用 Lua 脚本原子地校验持有者后释放或续期。

使用示例:
    import redis
    from ylock.locks import RedisLockStore

    client = redis.Redis.from_url("redis://localhost:6379/0", socket_timeout=5)
    store = RedisLockStore("node-1", client)

    if store.acquire("lock:order:42", 600):
        try:
            ...
        finally:
            store.release("lock:order:42")
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from .base import LockStore

logger = logging.getLogger(__name__)


# Lua 脚本：只有值匹配时才删除
RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""

# Lua 脚本：只有值匹配时才延长
REFRESH_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("expire", KEYS[1], ARGV[2])
else
    return 0
end
"""


def _ttl_seconds(ttl) -> int:
    """Redis 过期时间只接受正整数秒"""
    return max(1, int(ttl))


class RedisLockStore(LockStore):
    """Redis 锁存储

    特性：
    - 原子性获取锁（SET NX EX），绝不覆盖已有持有者
    - 自动过期，持有进程崩溃后锁自然释放
    - 只有持有者能释放和续期（Lua 脚本校验）

    Attributes:
        node_id: 当前节点标识
        _redis: Redis 客户端（redis.Redis 或兼容对象）
    """

    def __init__(self, node_id: str, redis_client):
        """初始化 Redis 锁存储

        Args:
            node_id: 当前节点标识，写入锁键的值
            redis_client: Redis 客户端，超时设置由调用方负责
        """
        super().__init__(node_id)
        self._redis = redis_client

    def acquire(self, key: str, ttl: int) -> bool:
        try:
            result = self._redis.set(
                key,
                self._node_id,
                nx=True,  # 只在键不存在时设置
                ex=_ttl_seconds(ttl),
            )
        except Exception as e:
            logger.error(f"Error acquiring lock {key}: {e}")
            return False

        if result:
            logger.debug(f"Acquired lock: {key} for {ttl}s")
            return True
        logger.debug(f"Failed to acquire lock: {key} (already held)")
        return False

    def release(self, key: str) -> bool:
        try:
            result = self._redis.eval(RELEASE_SCRIPT, 1, key, self._node_id)
        except Exception as e:
            logger.error(f"Error releasing lock {key}: {e}")
            return False

        if result:
            logger.debug(f"Released lock: {key}")
            return True
        logger.debug(f"Failed to release lock: {key} (not held or expired)")
        return False

    def refresh(self, key: str, ttl: int) -> bool:
        try:
            result = self._redis.eval(
                REFRESH_SCRIPT, 1, key, self._node_id, _ttl_seconds(ttl)
            )
        except Exception as e:
            logger.error(f"Error refreshing lock {key}: {e}")
            return False

        if result:
            logger.debug(f"Refreshed lock: {key} for {ttl}s")
            return True
        logger.debug(f"Failed to refresh lock: {key} (not held or expired)")
        return False

    def is_held(self, key: str) -> bool:
        try:
            current_value = self._redis.get(key)
        except Exception as e:
            logger.error(f"Error reading lock {key}: {e}")
            return False

        if current_value is None:
            return False
        if isinstance(current_value, bytes):
            current_value = current_value.decode()
        return current_value == self._node_id


class MemoryLockTable:
    """内存锁表

    模拟 Redis 单键原子操作，可被多个 MemoryLockStore 共享，
    使同一进程内的多个锁管理器互相可见。
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._records: Dict[str, Tuple[str, float]] = {}  # key -> (owner, expires_at)
        self._lock = threading.Lock()
        self._clock = clock

    def _get_alive(self, key: str) -> Optional[Tuple[str, float]]:
        record = self._records.get(key)
        if record is None:
            return None
        if record[1] <= self._clock():
            del self._records[key]
            return None
        return record

    def set_if_absent(self, key: str, owner: str, ttl: float) -> bool:
        with self._lock:
            if self._get_alive(key) is not None:
                return False
            self._records[key] = (owner, self._clock() + ttl)
            return True

    def delete_if_owner(self, key: str, owner: str) -> bool:
        with self._lock:
            record = self._get_alive(key)
            if record is None or record[0] != owner:
                return False
            del self._records[key]
            return True

    def expire_if_owner(self, key: str, owner: str, ttl: float) -> bool:
        with self._lock:
            record = self._get_alive(key)
            if record is None or record[0] != owner:
                return False
            self._records[key] = (owner, self._clock() + ttl)
            return True

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            record = self._get_alive(key)
            return record[0] if record else None

    def ttl(self, key: str) -> float:
        """剩余过期时间（秒），键不存在时返回 -2，与 Redis TTL 保持一致"""
        with self._lock:
            record = self._get_alive(key)
            if record is None:
                return -2
            return record[1] - self._clock()


class MemoryLockStore(LockStore):
    """内存锁存储（用于单实例或测试）

    与 RedisLockStore 语义一致，但锁仅在当前进程内可见。
    """

    def __init__(self, node_id: str, table: Optional[MemoryLockTable] = None):
        super().__init__(node_id)
        self.table = table if table is not None else MemoryLockTable()

    def acquire(self, key: str, ttl: int) -> bool:
        return self.table.set_if_absent(key, self._node_id, _ttl_seconds(ttl))

    def release(self, key: str) -> bool:
        return self.table.delete_if_owner(key, self._node_id)

    def refresh(self, key: str, ttl: int) -> bool:
        return self.table.expire_if_owner(key, self._node_id, _ttl_seconds(ttl))

    def is_held(self, key: str) -> bool:
        return self.table.get(key) == self._node_id


def create_redis_client(redis_settings):
    """根据 RedisSettings 创建 Redis 客户端

    Args:
        redis_settings: RedisSettings 配置

    Returns:
        redis.Redis 实例
    """
    import redis

    return redis.Redis.from_url(
        redis_settings.url,
        socket_timeout=redis_settings.socket_timeout,
        socket_connect_timeout=redis_settings.socket_connect_timeout,
        max_connections=redis_settings.max_connections,
    )


def create_lock_store(
    node_id: str,
    redis_client=None,
    redis_settings=None,
    table: Optional[MemoryLockTable] = None,
) -> LockStore:
    """创建锁存储实例

    Args:
        node_id: 当前节点标识
        redis_client: 已创建的 Redis 客户端，优先使用
        redis_settings: RedisSettings，url 非空时据此创建客户端
        table: 内存锁表，仅在退化为内存锁时使用

    Returns:
        锁存储实例，既无客户端也无 URL 时返回 MemoryLockStore
    """
    if redis_client is None and redis_settings is not None and redis_settings.url:
        redis_client = create_redis_client(redis_settings)

    if redis_client is not None:
        return RedisLockStore(node_id, redis_client)

    logger.warning("No redis configured, falling back to in-memory lock store")
    return MemoryLockStore(node_id, table)
