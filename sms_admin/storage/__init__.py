"""Storage layer - in-memory mock store."""

from sms_admin.storage.base import LogFilters, StorageBackend
from sms_admin.storage.fixtures import Fixtures, build_demo_fixtures
from sms_admin.storage.memory import InMemoryStorage

__all__ = ["LogFilters", "StorageBackend", "Fixtures", "build_demo_fixtures", "InMemoryStorage"]
