# cloudhire/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from cloudhire.api.v1.applications import router as applications_router
from cloudhire.api.v1.jobs import router as jobs_router
from cloudhire.api.v1.uploads import router as uploads_router
from cloudhire.core.config import settings
from cloudhire.core.cors import CORS_HEADERS
from cloudhire.core.errors import (
    CloudHireError,
    InternalError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
    error_from_response,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def error_response(exc: CloudHireError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=CORS_HEADERS)


app = FastAPI(title="CloudHire API")

# apply route is registered first so /jobs/{job_id}/apply never shadows
app.include_router(applications_router)
app.include_router(jobs_router)
app.include_router(uploads_router)


@app.middleware("http")
async def cors_and_preflight(request: Request, call_next):
    # answer every preflight directly, whatever the path
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = error_response(InternalError("Internal server error"))
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(CloudHireError)
async def cloudhire_error_handler(request: Request, exc: CloudHireError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
    return error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(NotFoundError("Not found"))
    if exc.status_code == 405:
        return error_response(MethodNotAllowedError(f"Method {request.method} not allowed"))
    return error_response(error_from_response(exc.status_code, {"error": str(exc.detail)}))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(e.get("loc", [])), "msg": e.get("msg")}
        for e in exc.errors()
    ]
    return error_response(ValidationError("Invalid request", details=errors))


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "service": "cloudhire", "store": settings.STORE_BACKEND}
