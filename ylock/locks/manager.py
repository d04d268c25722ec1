"""锁管理器

面向资源的加锁/解锁接口，负责键名前缀、默认超时，以及托管锁的续期。

两种加锁方式:
    - simple_lock / simple_unlock: 锁在 Redis 中的过期时间即调用方给出的时间，
      不做续期，适用于短时间、自行管理的临界区
    - lock / unlock: 锁在 Redis 中只设置较短的安全过期时间（lock_timeout），
      本进程记录最长持有截止时间，由 refresh_sweep 周期性续期。
      进程崩溃后锁在安全过期时间内自动释放；进程存活但超过最长持有时间后，
      不再续期，锁随 Redis 过期自然释放

使用示例:
    from ylock import LockManager

    manager = LockManager(redis_client)

    if manager.lock_order("42"):
        try:
            process_order("42")
        finally:
            manager.unlock_order("42")
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from ..config import AppSettings, LockSettings
from ..log import lock_logger as logger
from ..utils import uuid_base64
from .base import LockStore
from .redis_lock import MemoryLockTable, create_lock_store, create_redis_client
from .registry import HoldRegistry


def _is_blank(value) -> bool:
    return not value or not str(value).strip()


class LockManager:
    """锁管理器

    Attributes:
        settings: 锁配置
        node_id: 当前实例的节点标识，构造时生成，之后不再改变
        _store: 锁存储
        _holds: 托管锁登记表（锁键 -> 最长持有截止时间）
    """

    def __init__(
        self,
        redis_client=None,
        settings: Optional[LockSettings] = None,
        node_id: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        table: Optional[MemoryLockTable] = None,
    ):
        """初始化锁管理器

        Args:
            redis_client: Redis 客户端，为空时使用内存锁
            settings: 锁配置，为空时使用默认配置
            node_id: 节点标识，为空时自动生成
            clock: 时间函数，返回秒级时间戳
            table: 内存锁表，仅在未提供 Redis 客户端时使用
        """
        self.settings = settings or LockSettings()
        self._node_id = node_id or uuid_base64()
        self._clock = clock
        self._store: LockStore = create_lock_store(
            self._node_id, redis_client=redis_client, table=table
        )
        self._holds = HoldRegistry()

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def store(self) -> LockStore:
        return self._store

    def make_key(self, resource_key: str) -> str:
        """生成带前缀的锁键名"""
        return f"{self.settings.key_prefix}{resource_key}"

    def deadline_of(self, resource_key: str) -> Optional[float]:
        """托管锁的最长持有截止时间，未登记时返回 None"""
        return self._holds.get(self.make_key(resource_key))

    def held_keys(self) -> List[str]:
        """当前登记续期的锁键"""
        return [key for key, _ in self._holds.snapshot()]

    # ========== 简单锁 ==========

    def simple_lock(self, resource_key: str, max_timeout: int = 0) -> bool:
        """根据 key 锁定资源，不做续期

        Args:
            resource_key: 资源键
            max_timeout: 过期时间（秒），小于等于 0 时使用 lock_timeout

        Returns:
            是否锁定，资源键为空时返回 False
        """
        if _is_blank(resource_key):
            return False

        if max_timeout <= 0:
            max_timeout = self.settings.lock_timeout

        key = self.make_key(resource_key)
        logger.info(f"Lock {key} for {max_timeout}s")

        result = self._store.acquire(key, max_timeout)
        if not result:
            logger.error(f"Lock {key} end with result {result}")
        return result

    def simple_unlock(self, resource_key: str) -> bool:
        if _is_blank(resource_key):
            return False

        key = self.make_key(resource_key)
        logger.info(f"Unlock {key}...")

        result = self._store.release(key)
        if not result:
            logger.warning(f"Unlock {key} end with result {result}")
        return result

    # ========== 托管锁 ==========

    def lock(self, resource_key: str, max_hold: int = 0) -> bool:
        """根据 key 锁定资源，持有期间自动续期

        Args:
            resource_key: 资源键
            max_hold: 最长持有时间（秒），小于等于 0 时使用 max_hold 配置

        Returns:
            是否锁定，资源键为空时返回 False
        """
        if _is_blank(resource_key):
            return False

        if max_hold <= 0:
            max_hold = self.settings.max_hold

        key = self.make_key(resource_key)
        logger.info(f"Lock {key} with max hold {max_hold}s")

        result = self._store.acquire(key, self.settings.lock_timeout)
        if result:
            self._holds.put(key, self._clock() + max_hold)
        else:
            logger.error(f"Lock {key} end with result {result}")
        return result

    def unlock(self, resource_key: str) -> bool:
        if _is_blank(resource_key):
            return False

        key = self.make_key(resource_key)
        logger.info(f"Unlock {key}...")

        # 先移除登记，避免续期扫描在释放之后又刷新该键
        self._holds.pop(key)
        result = self._store.release(key)
        if not result:
            logger.warning(f"Unlock {key} end with result {result}")
        return result

    @contextmanager
    def hold(self, resource_key: str, max_hold: int = 0) -> Iterator[bool]:
        """上下文管理器方式使用托管锁

        Yields:
            是否成功获取锁

        Examples:
            with manager.hold("report:daily") as acquired:
                if acquired:
                    build_report()
        """
        acquired = self.lock(resource_key, max_hold)
        try:
            yield acquired
        finally:
            if acquired:
                self.unlock(resource_key)

    def refresh_sweep(self) -> int:
        """刷新托管锁的过期时间

        超过最长持有时间的锁从登记表移除，此后不再续期；
        本轮仍会对其做最后一次续期，之后由 Redis 过期自然释放。

        Returns:
            成功续期的锁数量
        """
        now = self._clock()
        refreshed = 0

        for key, deadline in self._holds.snapshot():
            if self._holds.discard_if_expired(key, deadline, now):
                logger.info(f"Lock {key} exceeded max hold time, stop refreshing")
            elif self._holds.get(key) != deadline:
                # 扫描期间已解锁或重新加锁
                continue

            if self._store.refresh(key, self.settings.lock_timeout):
                refreshed += 1
            else:
                logger.warning(f"Refresh lock {key} failed")

        if refreshed:
            logger.debug(f"Refreshed {refreshed} locks")
        return refreshed

    # ========== 业务便捷接口 ==========

    def lock_order(self, order_id: str) -> bool:
        """锁住订单"""
        result = not _is_blank(order_id) and self.lock(
            f"{self.settings.order_prefix}{order_id}", self.settings.order_max_hold
        )
        logger.info(f"Lock order {order_id} result {result}")
        return result

    def unlock_order(self, order_id: str) -> bool:
        """解锁订单"""
        if _is_blank(order_id):
            return False

        result = self.unlock(f"{self.settings.order_prefix}{order_id}")
        logger.info(f"Unlock order {order_id} result {result}")
        return result


def create_lock_manager(settings=None, redis_client=None) -> LockManager:
    """根据 AppSettings 创建锁管理器

    Args:
        settings: AppSettings，为空时使用默认配置（读取环境变量）
        redis_client: 已创建的 Redis 客户端，优先于 settings.redis.url

    Returns:
        锁管理器
    """
    settings = settings or AppSettings()
    if redis_client is None and settings.redis.url:
        redis_client = create_redis_client(settings.redis)
    return LockManager(redis_client=redis_client, settings=settings.lock)
