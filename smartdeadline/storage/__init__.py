from .interface import StorageError, StoragePort, StorageWriteError, StoredRecord
from .local import LocalStorage, LocalStorageAdapter

__all__ = [
    "LocalStorage",
    "LocalStorageAdapter",
    "StorageError",
    "StoragePort",
    "StorageWriteError",
    "StoredRecord",
]
