"""SQLAlchemy models for Stockroom."""

from stockroom.models.storage_entry import StorageEntry

__all__ = [
    "StorageEntry",
]
