# livestock_core/storage/__init__.py
"""
Storage module for persisting the client session to disk.
"""
from .local_storage import (
    LocalStorage,
    DEFAULT_STORAGE_DIR,
    USER_KEY,
    TOKENS_KEY,
)

__all__ = [
    "LocalStorage",
    "DEFAULT_STORAGE_DIR",
    "USER_KEY",
    "TOKENS_KEY",
]
