# cloudhire/lambda_handler.py
"""
API Gateway proxy entry point (REST v1 and HTTP API v2 events).

Routes the same operations as the FastAPI app:
    GET/POST/PUT/DELETE /jobs, GET/PUT/DELETE /jobs/{id},
    POST /jobs/{jobId}/apply, POST /upload/presigned-url, GET /upload/url
and returns {statusCode, headers, body} with the shared CORS headers.
A stage prefix in the path (e.g. /prod/jobs) is ignored.
"""
import base64
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from cloudhire.core.config import settings
from cloudhire.core.cors import CORS_HEADERS
from cloudhire.core.errors import (
    CloudHireError,
    InternalError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
)
from cloudhire.core.security import authenticate
from cloudhire.db.store import RecordStore, get_store
from cloudhire.services import jobs as job_service
from cloudhire.services import storage
from cloudhire.services.applications import submit_application

logger = logging.getLogger()
logger.setLevel(settings.LOG_LEVEL)

MUTATING = ("POST", "PUT", "DELETE")


def _response(status: int, body: Any) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json", **CORS_HEADERS}
    return {"statusCode": status, "headers": headers, "body": json.dumps(body, default=str)}


def _method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod") or (event.get("requestContext") or {}).get("http", {}).get("method") or ""
    return method.upper()


def _path(event: Dict[str, Any]) -> str:
    return event.get("path") or event.get("rawPath") or (event.get("requestContext") or {}).get("http", {}).get("path") or ""


def _header(event: Dict[str, Any], name: str) -> Optional[str]:
    for key, value in (event.get("headers") or {}).items():
        if key.lower() == name.lower():
            return value
    return None


def _body(event: Dict[str, Any]) -> Any:
    raw = event.get("body")
    if raw is None or isinstance(raw, (dict, list)):
        return raw
    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            raise ValidationError("Body must be valid JSON")
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("Body must be valid JSON")


def _route(path: str, path_params: Dict[str, Any]) -> Tuple[str, Optional[str]]:
    """Returns (route name, job id from the path)."""
    segments: List[str] = [s for s in path.split("/") if s]
    path_id = path_params.get("id") or path_params.get("jobId")

    if "jobs" in segments:
        first = segments.index("jobs")
        rest = segments[first + 1:]
        if not rest:
            return "jobs", path_id
        if len(rest) == 1:
            return "job", path_id or rest[0]
        if len(rest) == 2 and rest[1] == "apply":
            return "apply", path_id or rest[0]
    elif segments[-2:] == ["upload", "presigned-url"]:
        return "presign", None
    elif segments[-2:] == ["upload", "url"]:
        return "file-url", None
    raise NotFoundError("Not found")


def _presign(body: Any) -> Dict[str, Any]:
    body = job_service.require_object(body)
    file_name = body.get("fileName")
    file_type = body.get("fileType")
    size = body.get("fileSize")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        raise ValidationError("fileSize must be an integer")
    storage.validate_cv_file(file_name, file_type, size)
    key = storage.build_cv_key(file_name)
    url = storage.generate_presigned_put_url(key, file_type, expires_in=settings.PRESIGN_EXPIRES)
    return {"uploadUrl": url, "fileKey": key, "expiresIn": settings.PRESIGN_EXPIRES}


def dispatch(event: Dict[str, Any], store: RecordStore) -> Tuple[int, Any]:
    method = _method(event)
    query = event.get("queryStringParameters") or {}
    route, path_id = _route(_path(event), event.get("pathParameters") or {})

    if method in MUTATING:
        authenticate(_header(event, "Authorization"))

    if route == "jobs":
        if method == "GET":
            if query.get("id") is not None:
                return 200, job_service.get_job(store, query.get("id"))
            return 200, job_service.list_jobs(store, query.get("page"), query.get("limit"))
        if method == "POST":
            item = job_service.create_job(store, _body(event))
            return 201, {"message": "Created", "item": item}
        if method == "PUT":
            _, item = job_service.update_job(store, _body(event), query_id=query.get("id"))
            return 200, {"message": "Updated successfully", "item": item}
        if method == "DELETE":
            deleted = job_service.delete_job(store, query_id=query.get("id"))
            return 200, {"message": f"Deleted item with ID: {deleted}", "deletedId": deleted}

    elif route == "job":
        if method == "GET":
            return 200, job_service.get_job(store, job_service.resolve_id(query.get("id"), path_id))
        if method == "PUT":
            _, item = job_service.update_job(store, _body(event), query_id=query.get("id"), path_id=path_id)
            return 200, {"message": "Updated successfully", "item": item}
        if method == "DELETE":
            deleted = job_service.delete_job(store, query_id=query.get("id"), path_id=path_id)
            return 200, {"message": f"Deleted item with ID: {deleted}", "deletedId": deleted}

    elif route == "apply":
        if method == "POST":
            return 200, submit_application(store, path_id, _body(event))

    elif route == "presign":
        if method == "POST":
            return 200, _presign(_body(event))

    elif route == "file-url":
        if method == "GET":
            key = (query.get("key") or "").strip()
            if not key:
                raise ValidationError("key is required")
            return 200, {"url": storage.generate_presigned_get_url(key), "expiresIn": storage.VIEW_URL_EXPIRES}

    raise MethodNotAllowedError(f"Method {method} not allowed")


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    method = _method(event)
    logger.info("Event received: %s %s", method, _path(event))

    if method == "OPTIONS":
        return {"statusCode": 200, "headers": dict(CORS_HEADERS), "body": ""}

    try:
        status, body = dispatch(event, get_store())
    except CloudHireError as exc:
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message)
        else:
            logger.info("Request rejected (%s): %s", exc.code, exc.message)
        return _response(exc.status_code, exc.to_body())
    except Exception:
        logger.exception("Unhandled error")
        err = InternalError("Internal server error")
        return _response(err.status_code, err.to_body())
    return _response(status, body)
