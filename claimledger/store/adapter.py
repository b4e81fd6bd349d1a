"""
Record Store Adapter

The key-value interface the lifecycle engine reads and writes claims through.
Implementations must give per-key atomicity for a single get or put.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict

from claimledger.core.errors import RecordNotFound

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """
    Key-value store contract.

    ``get`` raises RecordNotFound for an absent key and StoreUnavailable when
    the backend fails. ``put`` raises StoreUnavailable when the write is not
    acknowledged.
    """

    @abstractmethod
    def get(self, key: str) -> bytes:
        ...

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        ...


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store for tests and single-process use."""

    def __init__(self):
        self._records: Dict[str, bytes] = {}

    def get(self, key: str) -> bytes:
        try:
            return self._records[key]
        except KeyError:
            raise RecordNotFound(key) from None

    def put(self, key: str, value: bytes) -> None:
        self._records[key] = bytes(value)
        logger.debug(f"Stored {len(value)} bytes under '{key}'")

    def keys(self) -> list[str]:
        return list(self._records)
