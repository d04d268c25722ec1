"""版本信息"""

__version__ = "0.1.0"
__author__ = "yafo-ai"
__description__ = "基于 Redis 的分布式资源锁，支持持有者校验与自动续期"
