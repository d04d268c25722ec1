"""文件大小解析工具

支持 B, KB, MB, GB, TB 等单位，供日志文件大小配置使用。

使用示例:
    from ylock.utils import parse_file_size

    size = parse_file_size("10MB")  # 返回 10485760
"""

from typing import Union


# 单位转换表（按长度降序排列）
SIZE_UNITS = [
    ('TB', 1024 ** 4),
    ('GB', 1024 ** 3),
    ('MB', 1024 ** 2),
    ('KB', 1024),
    ('B', 1),
]

SIZE_UNIT_ALIASES = {
    'T': 'TB',
    'G': 'GB',
    'M': 'MB',
    'K': 'KB',
}


def parse_file_size(size_str: Union[str, int, float]) -> int:
    """解析文件大小字符串

    Args:
        size_str: 文件大小字符串，如 "10MB", "512K"；数字按字节数处理

    Returns:
        字节数

    Raises:
        ValueError: 格式无效
    """
    if isinstance(size_str, (int, float)):
        return int(size_str)

    text = str(size_str).strip().upper()
    if not text:
        raise ValueError("文件大小字符串不能为空")

    for alias, unit in SIZE_UNIT_ALIASES.items():
        if text.endswith(alias):
            text = text[:-len(alias)] + unit
            break

    for unit, multiplier in SIZE_UNITS:
        if text.endswith(unit):
            number_str = text[:-len(unit)].strip()
            try:
                return int(float(number_str) * multiplier)
            except ValueError:
                raise ValueError(f"无法解析文件大小: {size_str}")

    try:
        return int(float(text))
    except ValueError:
        raise ValueError(f"无法解析文件大小: {size_str}")
