"""
Storage module for ledger records.

Provides the key-value contract the lifecycle engine depends on and two
implementations:
- In-memory (tests, single process)
- SQLite (durable, local file)
"""
from .adapter import InMemoryRecordStore, RecordStore
from .sqlite_store import SQLiteRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "SQLiteRecordStore",
]
