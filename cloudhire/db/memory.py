# cloudhire/db/memory.py
# In-memory record store for development and tests. Mirrors DynamoDB
# semantics: put overwrites, update creates missing records, delete is
# unconditional.
import copy
import threading
from typing import Dict, List, Optional

from cloudhire.core.errors import ConflictError, ValidationError
from cloudhire.db.store import Record, RecordStore


class InMemoryRecordStore(RecordStore):
    def __init__(self, records: Optional[List[Record]] = None):
        self._lock = threading.Lock()
        self._items: Dict[str, Record] = {}
        for record in records or []:
            self._items[str(record["id"])] = copy.deepcopy(record)

    def get(self, record_id: str) -> Optional[Record]:
        with self._lock:
            item = self._items.get(record_id)
            return copy.deepcopy(item) if item is not None else None

    def put(self, record: Record, if_absent: bool = False) -> None:
        record_id = record["id"]
        with self._lock:
            if if_absent and record_id in self._items:
                raise ConflictError("record already exists", id=record_id)
            self._items[record_id] = copy.deepcopy(record)

    def update(self, record_id: str, fields: Record) -> None:
        if not fields:
            raise ValidationError("no fields to update")
        with self._lock:
            item = self._items.setdefault(record_id, {"id": record_id})
            item.update(copy.deepcopy(fields))

    def delete(self, record_id: str) -> None:
        with self._lock:
            self._items.pop(record_id, None)

    def scan(self) -> List[Record]:
        with self._lock:
            return [copy.deepcopy(item) for item in self._items.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
