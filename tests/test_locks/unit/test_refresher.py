"""续期调度测试"""

import threading
from types import SimpleNamespace

from ylock.locks import LockManager, LockRefresher
from ylock.locks.refresher import REFRESH_JOB_ID


class _StubApp:
    """提供 add_event_handler 与 state 的最小应用对象"""

    def __init__(self):
        self.handlers = {"startup": [], "shutdown": []}
        self.state = SimpleNamespace()

    def add_event_handler(self, event_type, func):
        self.handlers[event_type].append(func)

    def fire(self, event_type):
        for func in self.handlers[event_type]:
            func()


class TestLockRefresher:
    """续期器生命周期测试"""

    def test_default_interval_from_settings(self, manager):
        refresher = LockRefresher(manager)

        assert refresher.interval == 50

    def test_start_and_stop(self, manager):
        """测试启动后注册扫描任务，停止后不再运行"""
        refresher = LockRefresher(manager, interval=30)
        refresher.start()
        try:
            assert refresher.running is True
            job = refresher._scheduler.get_job(REFRESH_JOB_ID)
            assert job is not None
            assert job.trigger.interval.total_seconds() == 30
        finally:
            refresher.stop()

        assert refresher.running is False

    def test_start_twice_is_noop(self, manager):
        refresher = LockRefresher(manager)
        refresher.start()
        try:
            scheduler = refresher._scheduler
            refresher.start()
            assert refresher._scheduler is scheduler
        finally:
            refresher.stop()

    def test_stop_when_not_running(self, manager):
        refresher = LockRefresher(manager)

        refresher.stop()

        assert refresher.running is False

    def test_sweep_invokes_manager(self, manager, fake_redis, clock):
        """测试扫描任务调用管理器续期"""
        manager.lock("r1", 3600)
        clock.advance(500)

        LockRefresher(manager)._sweep()

        assert fake_redis.ttl("lock:r1") == 600

    def test_sweep_swallows_errors(self, manager, monkeypatch):
        """测试扫描异常不会中断定时任务"""
        def broken():
            raise RuntimeError("boom")

        monkeypatch.setattr(manager, "refresh_sweep", broken)

        LockRefresher(manager)._sweep()

    def test_scheduler_fires_sweep(self, manager, monkeypatch):
        """测试启动后调度器按间隔触发续期扫描"""
        fired = threading.Event()
        monkeypatch.setattr(manager, "refresh_sweep", fired.set)

        refresher = LockRefresher(manager, interval=0.1)
        refresher.start()
        try:
            assert fired.wait(timeout=5) is True
        finally:
            refresher.stop()


class TestLockRefresherInitApp:
    """应用集成测试"""

    def test_init_app_lifecycle(self, manager):
        app = _StubApp()
        refresher = LockRefresher(manager)

        refresher.init_app(app)
        assert app.state.lock_refresher is refresher
        assert app.state.lock_manager is manager

        app.fire("startup")
        assert refresher.running is True

        app.fire("shutdown")
        assert refresher.running is False

    def test_init_app_disabled(self, fake_redis, clock, lock_settings):
        """测试关闭续期配置时不启动"""
        settings = lock_settings.model_copy(update={"refresh_enabled": False})
        refresher = LockRefresher(LockManager(fake_redis, settings=settings, clock=clock))
        app = _StubApp()

        refresher.init_app(app)
        app.fire("startup")

        assert refresher.running is False
