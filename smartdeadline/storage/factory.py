from __future__ import annotations

from smartdeadline.config import AppConfig

from .interface import StoragePort
from .local import LocalStorage, LocalStorageAdapter


def build_storage(config: AppConfig) -> StoragePort:
    if config.backend == "redis":
        from .redis_adapter import RedisStorageAdapter

        return RedisStorageAdapter(config.storage_key, config.redis_url)
    return LocalStorageAdapter(
        config.storage_key, LocalStorage(config.data_dir, origin=config.origin)
    )


__all__ = ["build_storage"]
