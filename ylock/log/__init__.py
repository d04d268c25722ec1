"""日志模块

提供日志配置与管理：
- setup_logger / setup_root_logger: 控制台与轮转文件输出
- get_logger: 获取 ylock 命名空间下的日志器
- lock_logger: 锁操作日志器

使用示例:
    from ylock.log import setup_root_logger, get_logger

    setup_root_logger(config=settings.logging)
    logger = get_logger("orders")
"""

from .logger import (
    setup_logger,
    setup_root_logger,
    create_formatter,
    MicrosecondFormatter,
    DEFAULT_LOG_FORMAT,
    get_logger,
    lock_logger,
)

__all__ = [
    "setup_logger",
    "setup_root_logger",
    "create_formatter",
    "MicrosecondFormatter",
    "DEFAULT_LOG_FORMAT",
    "get_logger",
    "lock_logger",
]
