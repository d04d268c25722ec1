"""工具模块

提供通用工具函数：
- 文件大小解析（日志配置使用）
- 节点标识生成

使用示例:
    from ylock.utils import parse_file_size, uuid_base64
"""

from .file_size import parse_file_size, SIZE_UNITS
from .generate_id import uuid_base64

__all__ = [
    "parse_file_size",
    "SIZE_UNITS",
    "uuid_base64",
]
