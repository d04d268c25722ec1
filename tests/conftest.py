"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 可控时钟与内存 Redis 替身
- 共享同一 Redis 的两个锁管理器（模拟两个进程）
- 临时文件
"""

import logging
import os

import pytest

from tests.helpers import FakeClock, FakeRedis
from ylock.config import LockSettings
from ylock.locks import LockManager


@pytest.fixture
def clock():
    """可手动推进的时钟"""
    return FakeClock()


@pytest.fixture
def fake_redis(clock):
    """内存 Redis 替身"""
    return FakeRedis(clock)


@pytest.fixture
def lock_settings():
    """默认锁配置（不读取环境变量的影响）"""
    return LockSettings(
        key_prefix="lock:",
        lock_timeout=600,
        max_hold=6000,
        order_prefix="order:",
        order_max_hold=600,
        refresh_interval=50,
    )


@pytest.fixture
def manager(fake_redis, clock, lock_settings):
    """进程 A 的锁管理器"""
    return LockManager(fake_redis, settings=lock_settings, clock=clock)


@pytest.fixture
def other_manager(fake_redis, clock, lock_settings):
    """进程 B 的锁管理器，与进程 A 共享 Redis"""
    return LockManager(fake_redis, settings=lock_settings, clock=clock)


@pytest.fixture
def temp_file(tmp_path):
    """创建临时文件的工厂函数"""
    def _create(relative_path: str, content: str) -> str:
        path = tmp_path / relative_path
        os.makedirs(path.parent, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _create


@pytest.fixture
def restore_root_logger():
    """测试结束后恢复根日志器的处理器与级别"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    root.propagate = propagate
