# cloudhire/core/errors.py
"""
Error taxonomy shared by the HTTP app, the lambda entry point and the client.

Every error kind maps to exactly one HTTP status and one machine-readable
code. Error bodies look like {"error": <message>, "code": <code>, ...extra}.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION_ERROR = "validation_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    CONFLICT = "conflict"
    INTERNAL_ERROR = "internal_error"

    @property
    def status_code(self) -> int:
        return _STATUS[self]


_STATUS = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL_ERROR: 500,
}


class CloudHireError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    # status of the response this error was rebuilt from, if any
    http_status: Optional[int] = None

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def code(self) -> str:
        return self.kind.value

    def to_body(self) -> Dict[str, Any]:
        body = {"error": self.message, "code": self.code}
        body.update(self.extra)
        return body


class ValidationError(CloudHireError):
    kind = ErrorKind.VALIDATION_ERROR


class UnauthorizedError(CloudHireError):
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(CloudHireError):
    kind = ErrorKind.NOT_FOUND


class MethodNotAllowedError(CloudHireError):
    kind = ErrorKind.METHOD_NOT_ALLOWED


class ConflictError(CloudHireError):
    kind = ErrorKind.CONFLICT


class InternalError(CloudHireError):
    kind = ErrorKind.INTERNAL_ERROR


class StorageError(InternalError):
    """Raised by record stores when the storage engine call fails."""


_BY_KIND = {
    ErrorKind.VALIDATION_ERROR: ValidationError,
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.METHOD_NOT_ALLOWED: MethodNotAllowedError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.INTERNAL_ERROR: InternalError,
}


def error_from_response(status_code: int, body: Optional[Dict[str, Any]]) -> CloudHireError:
    """
    Rebuild a typed error from an error response. Prefers the body's `code`,
    falls back to the HTTP status. Accepts {error}, {message} or {detail}.
    """
    body = body if isinstance(body, dict) else {}
    message = body.get("error") or body.get("message") or body.get("detail") or f"HTTP {status_code}"
    extra = {k: v for k, v in body.items() if k not in ("error", "message", "detail", "code")}

    kind = None
    try:
        kind = ErrorKind(body.get("code"))
    except ValueError:
        for candidate, status in _STATUS.items():
            if status == status_code:
                kind = candidate
                break
    if kind is None:
        kind = ErrorKind.VALIDATION_ERROR if 400 <= status_code < 500 else ErrorKind.INTERNAL_ERROR

    err = _BY_KIND[kind](str(message), **extra)
    err.http_status = status_code
    return err
