# cloudhire/client/job_service.py
"""
Async client for the CloudHire jobs API.

Public:
- JobServiceClient.list_jobs / get_job / create_job / update_job / delete_job
- JobServiceClient.submit_application / request_cv_upload
- normalize_jobs_response(data, page, limit) -> {jobs, total, page, limit}
- is_network_error(exc) -> bool

Fixture data is only used when asked for: `use_fixtures=True` (or no
base_url at all) answers every call from an in-memory copy of the fixture
jobs, and `fallback_on_network_error=True` answers from fixtures after a
transport-level failure. Every other error is raised to the caller.
"""
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from cloudhire.core.config import ClientSettings
from cloudhire.core.errors import (
    CloudHireError,
    InternalError,
    NotFoundError,
    ValidationError,
    error_from_response,
)
from cloudhire.services.fixtures import fixture_jobs
from cloudhire.services.jobs import is_valid_job
from cloudhire.utils.ids import generate_application_id, generate_job_id, normalize_id, now_iso

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]

NETWORK_ERROR_PATTERNS = (
    "failed to fetch",
    "networkerror",
    "network error",
    "network request failed",
    "fetch failed",
    "cors",
    "timeout",
    "timed out",
    "connection",
    "econnrefused",
    "enotfound",
    "eai_again",
)

REQUIRED_JOB_FIELDS = ("title", "company", "description")


def is_network_error(exc: Optional[BaseException]) -> bool:
    """True for transport-level failures (no HTTP response was received)."""
    if exc is None:
        return False
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, (CloudHireError, httpx.HTTPStatusError)):
        return False
    text = f"{type(exc).__name__} {exc}".lower()
    return any(pattern in text for pattern in NETWORK_ERROR_PATTERNS)


def filter_valid_jobs(items: Any) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        return []
    return [item for item in items if is_valid_job(item)]


def normalize_jobs_response(data: Any, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    """
    Accepts a bare array, {jobs: [...]}, {data: [...]} or {data: {jobs: [...]}}
    and returns {jobs, total, page, limit} with invalid jobs dropped.
    Unpaginated shapes (arrays) are sliced here.
    """
    if isinstance(data, dict) and isinstance(data.get("data"), (list, dict)):
        return normalize_jobs_response(data["data"], page, limit)

    if isinstance(data, list):
        jobs = filter_valid_jobs(data)
        start = (page - 1) * limit
        return {"jobs": jobs[start:start + limit], "total": len(jobs), "page": page, "limit": limit}

    if isinstance(data, dict):
        jobs = filter_valid_jobs(data.get("jobs") or [])
        total = data.get("total")
        return {
            "jobs": jobs,
            "total": total if isinstance(total, int) else len(jobs),
            "page": data.get("page") or page,
            "limit": data.get("limit") or limit,
        }

    raise InternalError("Unexpected jobs response shape")


def _unwrap(data: Any) -> Any:
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return data


def _item(data: Any) -> Optional[Dict[str, Any]]:
    # success bodies may be empty or not JSON at all
    data = _unwrap(data)
    if not isinstance(data, dict):
        return None
    return data.get("item")


class FixtureJobSource:
    """In-memory stand-in for the API, seeded from the fixture jobs."""

    def __init__(self, jobs: Optional[List[Dict[str, Any]]] = None):
        self._jobs: List[Dict[str, Any]] = jobs if jobs is not None else fixture_jobs()

    def _find(self, job_id: str) -> Optional[Dict[str, Any]]:
        for job in self._jobs:
            if str(job.get("id")) == job_id:
                return job
        return None

    def list_jobs(self, page: int, limit: int) -> Dict[str, Any]:
        return normalize_jobs_response(list(self._jobs), page, limit)

    def get_job(self, job_id: str) -> Dict[str, Any]:
        job = self._find(job_id)
        if job is None:
            raise NotFoundError("Job not found", searchedId=job_id)
        return dict(job)

    def create_job(self, record: Dict[str, Any]) -> Dict[str, Any]:
        existing = self._find(record["id"])
        if existing is not None:
            self._jobs.remove(existing)
        self._jobs.insert(0, dict(record))
        return dict(record)

    def update_job(self, job_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        changes = {k: v for k, v in fields.items() if k not in ("id", "_id")}
        if not changes:
            raise ValidationError("no fields to update")
        job = self._find(job_id)
        if job is None:
            job = {"id": job_id}
            self._jobs.append(job)
        job.update(changes)
        return dict(job)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        job = self._find(job_id)
        if job is not None:
            self._jobs.remove(job)
        return {"message": f"Deleted item with ID: {job_id}", "deletedId": job_id}

    def submit_application(self, job_id: str, cv_file_key: str) -> Dict[str, Any]:
        # the job id is a reference only, as on the server
        return {
            "success": True,
            "applicationId": generate_application_id(),
            "jobId": job_id,
            "cvFileKey": cv_file_key,
            "submittedAt": now_iso(),
        }


class JobServiceClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        use_fixtures: bool = False,
        fallback_on_network_error: bool = False,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        fixtures: Optional[FixtureJobSource] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.token_provider = token_provider
        self.use_fixtures = use_fixtures
        self.fallback_on_network_error = fallback_on_network_error
        self.timeout = timeout
        self._transport = transport
        self.fixtures = fixtures or FixtureJobSource()

    @classmethod
    def from_settings(cls, cfg: Optional[ClientSettings] = None, **kwargs) -> "JobServiceClient":
        cfg = cfg or ClientSettings()
        return cls(
            base_url=cfg.API_BASE_URL,
            use_fixtures=cfg.USE_FIXTURES,
            fallback_on_network_error=cfg.FALLBACK_TO_FIXTURES,
            timeout=cfg.TIMEOUT_SEC,
            **kwargs,
        )

    @property
    def fixture_mode(self) -> bool:
        return self.use_fixtures or not self.base_url

    async def _token(self) -> Optional[str]:
        if self.token_provider is None:
            return None
        token = self.token_provider()
        if inspect.isawaitable(token):
            token = await token
        return token

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        auth: bool = False,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if auth:
            token = await self._token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        request_kwargs: Dict[str, Any] = {"headers": headers}
        if params:
            request_kwargs["params"] = params
        if payload is not None:
            request_kwargs["json"] = payload

        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
            response = await client.request(method, path, **request_kwargs)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            if not isinstance(body, dict):
                body = {"error": f"HTTP {response.status_code}: {response.reason_phrase}"}
            raise error_from_response(response.status_code, body)
        return body

    async def _call(self, operation: str, remote: Callable[[], Awaitable[Any]], local: Callable[[], Any]) -> Any:
        if self.fixture_mode:
            logger.debug("Using fixture data for %s", operation)
            return local()
        try:
            return await remote()
        except Exception as exc:
            if self.fallback_on_network_error and is_network_error(exc):
                logger.warning("Network error during %s, falling back to fixture data: %s", operation, exc)
                return local()
            logger.error("Error during %s: %s", operation, exc)
            raise

    async def list_jobs(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        async def remote():
            data = await self._request("GET", "/jobs", params={"page": page, "limit": limit})
            return normalize_jobs_response(data, page, limit)

        return await self._call("list_jobs", remote, lambda: self.fixtures.list_jobs(page, limit))

    async def get_job(self, job_id: Any) -> Dict[str, Any]:
        jid = normalize_id(job_id)
        if not jid:
            raise ValidationError("Job ID is required")

        async def remote():
            return _unwrap(await self._request("GET", "/jobs", params={"id": jid}))

        return await self._call("get_job", remote, lambda: self.fixtures.get_job(jid))

    async def create_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and create a job. Blank title/company/description are
        rejected before any request; id and createdAt are filled in when absent.
        """
        record = {k: v.strip() if isinstance(v, str) else v for k, v in data.items()}
        missing = [f for f in REQUIRED_JOB_FIELDS if not record.get(f)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)
        record["id"] = normalize_id(record.get("id")) or generate_job_id()
        record.setdefault("createdAt", now_iso())

        async def remote():
            body = await self._request("POST", "/jobs", payload=record, auth=True)
            return _item(body) or record

        return await self._call("create_job", remote, lambda: self.fixtures.create_job(record))

    async def update_job(self, job_id: Any, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        jid = normalize_id(job_id)
        if not jid:
            raise ValidationError("Job ID is required")

        async def remote():
            body = await self._request("PUT", "/jobs", params={"id": jid}, payload=fields, auth=True)
            return _item(body)

        return await self._call("update_job", remote, lambda: self.fixtures.update_job(jid, fields))

    async def delete_job(self, job_id: Any) -> Dict[str, Any]:
        jid = normalize_id(job_id)
        if not jid:
            raise ValidationError("Job ID is required")

        async def remote():
            return await self._request("DELETE", "/jobs", params={"id": jid}, auth=True)

        return await self._call("delete_job", remote, lambda: self.fixtures.delete_job(jid))

    async def submit_application(
        self,
        job_id: Any,
        cv_file_key: str,
        cover_letter: str = "",
        allow_search: bool = False,
    ) -> Dict[str, Any]:
        jid = normalize_id(job_id)
        if not jid:
            raise ValidationError("Job ID is required")
        if not cv_file_key:
            raise ValidationError("CV file key is required")
        payload = {"cvFileKey": cv_file_key, "coverLetter": cover_letter, "allowSearch": allow_search}

        async def remote():
            path = f"/jobs/{quote(jid, safe='')}/apply"
            return _unwrap(await self._request("POST", path, payload=payload, auth=True))

        return await self._call("submit_application", remote, lambda: self.fixtures.submit_application(jid, cv_file_key))

    async def request_cv_upload(self, file_name: str, file_type: str, file_size: Optional[int] = None) -> Dict[str, Any]:
        """Ask the API for a presigned upload URL. Needs a real backend."""
        if self.fixture_mode:
            raise InternalError("API base URL is not configured")
        payload: Dict[str, Any] = {"fileName": file_name, "fileType": file_type}
        if file_size is not None:
            payload["fileSize"] = file_size
        return await self._request("POST", "/upload/presigned-url", payload=payload, auth=True)
