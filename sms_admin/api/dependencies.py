"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from sms_admin.core.config import Settings, settings
from sms_admin.storage.base import StorageBackend
from sms_admin.storage.memory import InMemoryStorage


# Storage singleton
_storage: StorageBackend | None = None


def get_storage() -> StorageBackend:
    """Get the storage backend singleton."""
    global _storage
    if _storage is None:
        _storage = InMemoryStorage()
    return _storage


# Type aliases for cleaner dependency injection
StorageDep = Annotated[StorageBackend, Depends(get_storage)]
SettingsDep = Annotated[Settings, Depends(lambda: settings)]
