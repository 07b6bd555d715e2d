# cloudhire/db/store.py
"""
Record store contract and the process-wide store instance.

Every store holds loosely-typed records addressed by a single `id` field.
Implementations:
- cloudhire.db.memory.InMemoryRecordStore (STORE_BACKEND=memory, dev/tests)
- cloudhire.db.dynamo.DynamoRecordStore   (STORE_BACKEND=dynamodb)
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from cloudhire.core.config import Settings, settings

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RecordStore(ABC):
    # attribute the engine keys records by; never writable through update()
    key_attribute: str = "id"

    @abstractmethod
    def get(self, record_id: str) -> Optional[Record]:
        """Return the record or None."""

    @abstractmethod
    def put(self, record: Record, if_absent: bool = False) -> None:
        """
        Write the whole record, overwriting any record with the same id.
        With if_absent=True raise ConflictError instead of overwriting.
        """

    @abstractmethod
    def update(self, record_id: str, fields: Record) -> None:
        """
        Set each of `fields` on the record (creating it when absent).
        `fields` must not contain the id.
        """

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Remove the record. Deleting a missing id is not an error."""

    @abstractmethod
    def scan(self) -> List[Record]:
        """Return every record in the table."""


def build_store(cfg: Settings) -> RecordStore:
    backend = (cfg.STORE_BACKEND or "memory").lower()
    if backend == "memory":
        from cloudhire.db.memory import InMemoryRecordStore
        return InMemoryRecordStore()
    if backend == "dynamodb":
        from cloudhire.db.dynamo import DynamoRecordStore
        return DynamoRecordStore(
            table_name=cfg.TABLE_NAME,
            key_attribute=cfg.TABLE_KEY_ATTRIBUTE,
            region_name=cfg.AWS_REGION,
            endpoint_url=cfg.DYNAMODB_ENDPOINT,
        )
    raise RuntimeError(f"Unknown STORE_BACKEND {cfg.STORE_BACKEND!r} (expected 'memory' or 'dynamodb')")


_store: Optional[RecordStore] = None


def get_store() -> RecordStore:
    """
    Returns the cached store for this process. Used as a FastAPI dependency
    and by the lambda entry point.
    """
    global _store
    if _store is None:
        _store = build_store(settings)
        logger.info("Record store initialised: %s", type(_store).__name__)
    return _store


def set_store(store: Optional[RecordStore]) -> None:
    global _store
    _store = store
