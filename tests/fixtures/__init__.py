"""Test fixtures for in-memory implementations."""

from .in_memory_storage import InMemoryKeyValueStore
from .in_memory_repositories import (
    InMemoryAdminRepository,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
    InMemoryVendorRepository,
)
from .recording_email_sender import RecordingEmailSender

__all__ = [
    "InMemoryAdminRepository",
    "InMemoryCategoryRepository",
    "InMemoryKeyValueStore",
    "InMemoryProductRepository",
    "InMemoryVendorRepository",
    "RecordingEmailSender",
]
