import base64
from uuid import uuid4


def uuid_base64() -> str:
    """生成 UUID 并转换为紧凑的 Base64 字符串

    128 位随机数按 URL 安全的 Base64 编码并去掉填充，固定 22 个可打印字符，
    用作进程内锁管理器的节点标识。
    """
    return base64.urlsafe_b64encode(uuid4().bytes).decode("ascii").rstrip("=")
