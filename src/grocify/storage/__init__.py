"""Storage layer for grocify application."""

from grocify.storage.base import Storage
from grocify.storage.local import LocalStorage
from grocify.storage.factories import create_local_storage, default_session_path

__all__ = ["Storage", "LocalStorage", "create_local_storage", "default_session_path"]
