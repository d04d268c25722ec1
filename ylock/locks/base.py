"""锁存储抽象基类

定义锁存储的接口规范。
"""

from abc import ABC, abstractmethod


class LockStore(ABC):
    """锁存储基类

    对单个键执行带持有者校验的原子操作。持有者标识为节点 ID，
    由创建者传入并在实例生命周期内保持不变。

    所有方法在存储出错时返回 False 并记录日志，不向调用方抛出异常。

    Attributes:
        node_id: 当前节点标识，作为锁的值写入存储
    """

    def __init__(self, node_id: str):
        if not node_id:
            raise ValueError("node_id must not be empty")
        self._node_id = node_id

    @property
    def node_id(self) -> str:
        return self._node_id

    @abstractmethod
    def acquire(self, key: str, ttl: int) -> bool:
        """获取锁

        仅当键不存在时写入节点标识，不会覆盖已有的值。

        Args:
            key: 锁的完整键名
            ttl: 过期时间（秒）

        Returns:
            是否成功获取锁
        """

    @abstractmethod
    def release(self, key: str) -> bool:
        """释放锁

        原子地校验持有者并删除键。

        Args:
            key: 锁的完整键名

        Returns:
            是否删除成功（键不存在或非本节点持有时为 False）
        """

    @abstractmethod
    def refresh(self, key: str, ttl: int) -> bool:
        """刷新锁过期时间

        原子地校验持有者并重置过期时间，不改变键值。

        Args:
            key: 锁的完整键名
            ttl: 新的过期时间（秒）

        Returns:
            是否刷新成功
        """

    @abstractmethod
    def is_held(self, key: str) -> bool:
        """检查当前节点是否持有锁"""
