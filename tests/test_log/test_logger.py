"""日志工具测试"""

import logging

from ylock.config import LoggingSettings
from ylock.log import (
    MicrosecondFormatter,
    create_formatter,
    get_logger,
    lock_logger,
    setup_logger,
    setup_root_logger,
)


class TestSetupLogger:
    """setup_logger 测试"""

    def test_console_logger(self):
        logger = setup_logger("ylock.test.console", level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, MicrosecondFormatter)

    def test_file_logger(self, tmp_path):
        """测试写入日志文件并自动创建目录"""
        log_file = tmp_path / "logs" / "lock.log"
        logger = setup_logger(
            "ylock.test.file",
            level="INFO",
            log_file=str(log_file),
            console=False,
            propagate=False,
        )

        logger.info("Lock lock:r1 acquired")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "Lock lock:r1 acquired" in log_file.read_text(encoding="utf-8")

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_handlers_replaced_on_repeat_setup(self):
        """测试重复设置不会叠加处理器"""
        setup_logger("ylock.test.repeat")
        logger = setup_logger("ylock.test.repeat")

        assert len(logger.handlers) == 1

    def test_invalid_level_falls_back_to_info(self):
        logger = setup_logger("ylock.test.level", level="nonsense")

        assert logger.level == logging.INFO


class TestSetupRootLogger:
    """setup_root_logger 测试"""

    def test_from_config(self, restore_root_logger, tmp_path):
        config = LoggingSettings(
            level="WARNING",
            file_path=str(tmp_path / "app.log"),
            enable_console=False,
        )

        root = setup_root_logger(config=config)

        assert root is logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert root.handlers[0].maxBytes == config.parsed_file_max_bytes


class TestFormatter:
    """格式化器测试"""

    def test_microsecond_precision(self):
        formatter = create_formatter("%(asctime)s %(message)s")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        record.created = 1700000000.123456

        text = formatter.format(record)

        assert ".123456" in text or ".123455" in text
        assert text.endswith("hello")

    def test_plain_formatter(self):
        formatter = create_formatter(use_microseconds=False)

        assert not isinstance(formatter, MicrosecondFormatter)


class TestGetLogger:
    """get_logger 测试"""

    def test_namespace(self):
        assert get_logger().name == "ylock"
        assert get_logger("orders").name == "ylock.orders"
        assert get_logger("ylock.locks").name == "ylock.locks"
        assert lock_logger.name == "ylock.lock"
