"""托管锁续期调度

基于 APScheduler 后台线程，按固定间隔调用 LockManager.refresh_sweep。
间隔应明显小于锁的安全过期时间（默认 50 秒对 600 秒），
留出足够余量应对短暂故障和调度抖动。

使用示例:
    from ylock import LockManager, LockRefresher

    manager = LockManager(redis_client)
    refresher = LockRefresher(manager)
    refresher.start()
    ...
    refresher.stop()

    # FastAPI 集成
    refresher.init_app(app)
"""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .manager import LockManager

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "ylock_refresh_sweep"


class LockRefresher:
    """托管锁续期器

    Attributes:
        manager: 锁管理器
        interval: 扫描间隔（秒）
        _scheduler: APScheduler 实例，启动时创建
    """

    def __init__(self, manager: LockManager, interval: Optional[float] = None):
        """初始化续期器

        Args:
            manager: 锁管理器
            interval: 扫描间隔（秒），为空时使用 manager.settings.refresh_interval
        """
        self.manager = manager
        self.interval = interval or manager.settings.refresh_interval
        if self.interval >= manager.settings.lock_timeout:
            logger.warning(
                f"Refresh interval {self.interval}s is not less than lock timeout "
                f"{manager.settings.lock_timeout}s, locks may expire before refresh"
            )
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def _sweep(self):
        try:
            self.manager.refresh_sweep()
        except Exception as e:
            logger.error(f"Lock refresh sweep failed: {e}")

    def start(self):
        """启动后台续期"""
        if self.running:
            logger.warning("Lock refresher is already running")
            return

        self._scheduler = BackgroundScheduler(
            job_defaults={"coalesce": True, "max_instances": 1},
        )
        self._scheduler.add_job(
            self._sweep,
            trigger=IntervalTrigger(seconds=self.interval),
            id=REFRESH_JOB_ID,
            name="Lock refresh sweep",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(f"Lock refresher started, interval: {self.interval}s")

    def stop(self, wait: bool = True):
        """停止后台续期

        Args:
            wait: 是否等待正在执行的扫描完成
        """
        if not self.running:
            return

        self._scheduler.shutdown(wait=wait)
        self._scheduler = None
        logger.info("Lock refresher stopped")

    def init_app(self, app):
        """集成到 FastAPI 应用

        Args:
            app: FastAPI 应用实例（或提供 add_event_handler 与 state 的兼容对象）
        """
        def _start_refresher():
            if self.manager.settings.refresh_enabled:
                self.start()

        def _stop_refresher():
            self.stop(wait=True)

        app.add_event_handler("startup", _start_refresher)
        app.add_event_handler("shutdown", _stop_refresher)

        app.state.lock_refresher = self
        app.state.lock_manager = self.manager
