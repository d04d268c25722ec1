"""托管锁登记表

记录本进程通过托管方式获取的锁及其最长持有截止时间。
续期扫描线程与请求线程会并发读写，所有操作都在内部锁下完成，
遍历基于快照进行。
"""

import threading
from typing import Dict, List, Optional, Tuple


class HoldRegistry:
    """线程安全的 锁键 -> 截止时间 映射

    截止时间为绝对时间戳（秒），与锁管理器使用的时钟一致。
    登记表只决定本进程是否继续续期，不代表锁的真实归属。
    """

    def __init__(self):
        self._deadlines: Dict[str, float] = {}
        self._lock = threading.RLock()

    def put(self, key: str, deadline: float) -> None:
        with self._lock:
            self._deadlines[key] = deadline

    def pop(self, key: str) -> Optional[float]:
        """移除并返回截止时间，不存在时返回 None"""
        with self._lock:
            return self._deadlines.pop(key, None)

    def get(self, key: str) -> Optional[float]:
        with self._lock:
            return self._deadlines.get(key)

    def snapshot(self) -> List[Tuple[str, float]]:
        with self._lock:
            return list(self._deadlines.items())

    def discard_if_expired(self, key: str, deadline: float, now: float) -> bool:
        """截止时间已过时移除登记

        仅当登记的截止时间仍是 deadline 时才移除，避免误删扫描期间
        被重新获取的同名锁。

        Returns:
            是否移除
        """
        with self._lock:
            if deadline >= now or self._deadlines.get(key) != deadline:
                return False
            del self._deadlines[key]
            return True

    def clear(self) -> None:
        with self._lock:
            self._deadlines.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._deadlines

    def __len__(self) -> int:
        with self._lock:
            return len(self._deadlines)
