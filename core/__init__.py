from .database import Database, Base, init_db
from .exceptions import QueueError, StorageUnavailable, WriteError
from .config import Settings, load_settings, configure_logging

__all__ = [
    "Database",
    "Base",
    "init_db",
    "QueueError",
    "StorageUnavailable",
    "WriteError",
    "Settings",
    "load_settings",
    "configure_logging",
]
