# cloudhire/services/jobs.py
"""
Job record operations behind GET/POST/PUT/DELETE /jobs.

These are plain synchronous functions over a RecordStore so the FastAPI
routes and the lambda entry point share one implementation. Each raises a
CloudHireError subclass on bad input; storage failures surface as
StorageError from the store.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from cloudhire.core.config import settings
from cloudhire.core.errors import NotFoundError, ValidationError
from cloudhire.db.store import Record, RecordStore
from cloudhire.utils.ids import normalize_id

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# legacy clients send `_id` instead of `id`
LEGACY_ID_FIELD = "_id"


def is_valid_job(record: Any) -> bool:
    """A record is listed only when both `id` and `title` are present and non-empty."""
    if not isinstance(record, dict):
        return False
    return bool(record.get("id")) and bool(record.get("title"))


def resolve_id(query_id: Any = None, path_id: Any = None, body: Optional[Record] = None) -> Optional[str]:
    # query string wins over the path parameter, the body is the last resort
    for candidate in (query_id, path_id):
        value = normalize_id(candidate)
        if value:
            return value
    if body:
        return normalize_id(body.get("id")) or normalize_id(body.get(LEGACY_ID_FIELD))
    return None


def require_object(body: Any) -> Record:
    if body is None:
        raise ValidationError("Body is required")
    if not isinstance(body, dict):
        raise ValidationError("Body must be a JSON object")
    return body


def _positive_int(name: str, raw: Any, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer")
    if value < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return value


def parse_pagination(page: Any = None, limit: Any = None) -> Optional[Tuple[int, int]]:
    """Returns (page, limit) when either was supplied, else None (no pagination)."""
    if page in (None, "") and limit in (None, ""):
        return None
    return _positive_int("page", page, DEFAULT_PAGE), _positive_int("limit", limit, DEFAULT_LIMIT)


def list_jobs(store: RecordStore, page: Any = None, limit: Any = None) -> Union[List[Record], Dict[str, Any]]:
    """
    Full scan filtered to valid jobs. Without page/limit the bare list is
    returned; with them the filtered list is sliced and wrapped in
    {jobs, total, page, limit}.
    """
    paging = parse_pagination(page, limit)
    jobs = [item for item in store.scan() if is_valid_job(item)]
    logger.info("list_jobs: %s valid records", len(jobs))
    if paging is None:
        return jobs
    page_no, size = paging
    start = (page_no - 1) * size
    return {"jobs": jobs[start:start + size], "total": len(jobs), "page": page_no, "limit": size}


def get_job(store: RecordStore, raw_id: Any) -> Record:
    record_id = normalize_id(raw_id)
    if not record_id:
        raise ValidationError("missing id")
    item = store.get(record_id)
    if item is None:
        logger.info("get_job: %s not found", record_id)
        raise NotFoundError("Job not found", searchedId=record_id)
    return item


def create_job(store: RecordStore, body: Any, strict: Optional[bool] = None) -> Record:
    """
    Store the body as-is under its normalised id. Overwrites an existing
    record unless strict create is enabled, in which case ConflictError.
    """
    body = require_object(body)
    record_id = normalize_id(body.get("id")) or normalize_id(body.get(LEGACY_ID_FIELD))
    if not record_id:
        raise ValidationError("missing id")
    if strict is None:
        strict = settings.STRICT_CREATE

    record = dict(body)
    record["id"] = record_id
    store.put(record, if_absent=strict)
    logger.info("create_job: stored %s", record_id)
    return record


def updatable_fields(body: Record, key_attribute: str = "id") -> Record:
    reserved = {"id", LEGACY_ID_FIELD, key_attribute}
    return {k: v for k, v in body.items() if k not in reserved}


def update_job(store: RecordStore, body: Any, query_id: Any = None, path_id: Any = None) -> Tuple[str, Optional[Record]]:
    """
    Partial update. Returns (id, record read back after the write); the
    read-back is best-effort and may be None after a concurrent delete.
    """
    body = require_object(body)
    record_id = resolve_id(query_id, path_id, body)
    if not record_id:
        raise ValidationError("missing id")
    fields = updatable_fields(body, store.key_attribute)
    if not fields:
        raise ValidationError("no fields to update")

    store.update(record_id, fields)
    logger.info("update_job: %s fields=%s", record_id, sorted(fields))
    return record_id, store.get(record_id)


def delete_job(store: RecordStore, query_id: Any = None, path_id: Any = None) -> str:
    record_id = resolve_id(query_id, path_id)
    if not record_id:
        raise ValidationError("missing id")
    store.delete(record_id)
    logger.info("delete_job: %s", record_id)
    return record_id
