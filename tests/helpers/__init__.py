"""测试辅助工具模块

提供测试专用的替身对象，避免在核心代码中添加测试专用方法。
"""

from .fake_redis import FakeClock, FakeRedis

__all__ = [
    "FakeClock",
    "FakeRedis",
]
