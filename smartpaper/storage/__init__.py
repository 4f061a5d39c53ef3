"""实体存储：接口、内存实现、SQL 实现与示例数据。"""

import logging

from smartpaper.config import Settings
from smartpaper.storage.base import Storage
from smartpaper.storage.memory import MemStorage
from smartpaper.storage.seed import seed_storage
from smartpaper.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """按配置创建存储实例，并在需要时写入示例数据。"""

    if settings.storage_backend == "sql":
        storage: Storage = SqlStorage(settings.database_url)
        logger.info("Using SQL storage: %s", settings.database_url)
    else:
        storage = MemStorage()
        logger.info("Using in-memory storage")

    if settings.seed_data:
        seed_storage(storage, iterations=settings.password_hash_iterations)
    return storage


__all__ = ["MemStorage", "SqlStorage", "Storage", "build_storage", "seed_storage"]
