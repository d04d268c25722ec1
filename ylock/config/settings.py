"""
配置模块
提供锁服务的默认配置，业务项目可以继承并覆盖
"""

from pydantic_settings import BaseSettings
from pydantic import Field, computed_field, model_validator

from ..utils import parse_file_size


class RedisSettings(BaseSettings):
    """Redis 配置

    使用示例:
        from ylock.config import RedisSettings

        redis_config = RedisSettings(
            url="redis://localhost:6379/0",
            socket_timeout=3.0,
        )

    说明:
        url 为空时锁服务退化为进程内存锁，仅适用于单实例或测试。
    """
    url: str = Field(default="", description="Redis连接URL")
    socket_timeout: float = Field(default=5.0, gt=0, description="命令超时时间（秒）")
    socket_connect_timeout: float = Field(default=5.0, gt=0, description="连接超时时间（秒）")
    max_connections: int = Field(default=10, gt=0, description="最大连接数")

    class Config:
        env_prefix = "YLOCK_REDIS_"


class LockSettings(BaseSettings):
    """锁配置

    使用示例:
        from ylock.config import LockSettings

        lock_config = LockSettings(
            key_prefix="myapp:lock:",
            lock_timeout=600,       # Redis 中锁的安全过期时间
            max_hold=6000,          # 托管锁默认最长持有时间
            refresh_interval=50,    # 续期扫描间隔
        )

    环境变量:
        YLOCK_LOCK_KEY_PREFIX=lock:
        YLOCK_LOCK_LOCK_TIMEOUT=600
        YLOCK_LOCK_REFRESH_INTERVAL=50

    配置说明:
        - lock_timeout: 锁在 Redis 中的过期时间，进程崩溃后锁最多保留这么久
        - max_hold: 托管锁的最长持有时间，超过后不再续期，由 Redis 过期自然释放
        - refresh_interval: 必须明显小于 lock_timeout，保证存活进程的锁在过期前得到续期
    """
    key_prefix: str = Field(default="lock:", description="锁键名前缀")
    lock_timeout: int = Field(default=600, gt=0, description="锁安全过期时间（秒）")
    max_hold: int = Field(default=6000, gt=0, description="托管锁默认最长持有时间（秒）")
    order_prefix: str = Field(default="order:", description="订单锁资源前缀")
    order_max_hold: int = Field(default=600, gt=0, description="订单锁最长持有时间（秒）")
    refresh_interval: float = Field(default=50.0, gt=0, description="续期扫描间隔（秒）")
    refresh_enabled: bool = Field(default=True, description="是否启用后台续期")

    @model_validator(mode="after")
    def _check_refresh_interval(self):
        if self.refresh_interval >= self.lock_timeout:
            raise ValueError(
                f"refresh_interval ({self.refresh_interval}) must be less than "
                f"lock_timeout ({self.lock_timeout})"
            )
        return self

    class Config:
        env_prefix = "YLOCK_LOCK_"


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        from ylock.config import LoggingSettings

        log_config = LoggingSettings(
            level="DEBUG",
            file_path="logs/lock.log",
            file_max_bytes="20MB",
        )

        max_bytes = log_config.parsed_file_max_bytes
    """
    level: str = Field(default="INFO", description="日志级别")
    file_path: str = Field(default="", description="日志文件路径，为空时不写文件")
    file_max_bytes: str = Field(default="10MB", description="单个日志文件最大大小")
    file_backup_count: int = Field(default=30, description="保留的备份文件数量")
    file_encoding: str = Field(default="utf-8", description="文件编码")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")

    @computed_field
    @property
    def parsed_file_max_bytes(self) -> int:
        """解析文件最大字节数字符串为整数"""
        return parse_file_size(self.file_max_bytes)

    class Config:
        env_prefix = "YLOCK_LOG_"


class AppSettings(BaseSettings):
    """应用配置

    聚合 Redis、锁与日志配置，可从 YAML 加载：

        from ylock.config import AppSettings, load_yaml_config

        settings = load_yaml_config("config/settings.yaml", AppSettings)

    对应 YAML:
        redis:
          url: "redis://localhost:6379/0"
        lock:
          key_prefix: "myapp:lock:"
        logging:
          level: "DEBUG"
    """
    app_name: str = Field(default="ylock", description="应用名称")
    redis: RedisSettings = Field(default_factory=RedisSettings)
    lock: LockSettings = Field(default_factory=LockSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    class Config:
        env_prefix = "YLOCK_"
