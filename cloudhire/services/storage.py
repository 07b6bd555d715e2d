# cloudhire/services/storage.py
"""
CV file handling on the object store (S3 or any S3-compatible endpoint).

Browsers upload CVs directly with a presigned PUT URL; the resulting object
key is later sent as `cvFileKey` when applying. The service never streams
file bytes itself.
"""
import asyncio
import concurrent.futures
import logging
import re
from pathlib import PurePosixPath
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from cloudhire.core.config import settings
from cloudhire.core.errors import InternalError, ValidationError
from cloudhire.utils.ids import now_ms, random_base36

logger = logging.getLogger(__name__)

CV_PREFIX = "cvs"
VIEW_URL_EXPIRES = 3600
ALLOWED_CV_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)

# Use synchronous boto3 but run blocking calls in threadpool to keep code async-friendly
_thread_pool = concurrent.futures.ThreadPoolExecutor(max_workers=3)


def _get_s3_client():
    """
    Create a boto3 S3 client. Explicit credentials/endpoint are optional;
    without them boto3's default credential chain is used.
    """
    client_kwargs = {"config": Config(signature_version="s3v4")}
    if settings.S3_ACCESS_KEY and settings.S3_SECRET_KEY:
        client_kwargs["aws_access_key_id"] = settings.S3_ACCESS_KEY
        client_kwargs["aws_secret_access_key"] = settings.S3_SECRET_KEY
    if settings.S3_ENDPOINT:
        client_kwargs["endpoint_url"] = str(settings.S3_ENDPOINT)
    region = settings.S3_REGION or settings.AWS_REGION
    if region:
        client_kwargs["region_name"] = region
    return boto3.client("s3", **client_kwargs)


def _bucket(bucket: Optional[str]) -> str:
    bucket = bucket or settings.S3_BUCKET
    if not bucket:
        raise InternalError("S3 bucket not configured")
    return bucket


def validate_cv_file(file_name: Optional[str], content_type: Optional[str], size: Optional[int] = None) -> None:
    """Raise ValidationError unless the file is a PDF/Word document within CV_MAX_BYTES."""
    if not isinstance(file_name, str) or not file_name.strip():
        raise ValidationError("fileName is required")
    if size is not None:
        if size <= 0:
            raise ValidationError("File is empty")
        if size > settings.CV_MAX_BYTES:
            max_mb = settings.CV_MAX_BYTES / (1024 * 1024)
            raise ValidationError(f"File too large. Maximum size: {max_mb:.1f}MB")
    if content_type not in ALLOWED_CV_TYPES:
        raise ValidationError("Only PDF or Word files are accepted (.pdf, .doc, .docx)")


def sanitize_file_name(file_name: str) -> str:
    name = PurePosixPath(file_name.replace("\\", "/")).name
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("._")
    return name or "cv"


def build_cv_key(file_name: str) -> str:
    # cvs/{timestamp}_{random}_{filename}
    return f"{CV_PREFIX}/{now_ms()}_{random_base36()}_{sanitize_file_name(file_name)}"


def generate_presigned_put_url(key: str, content_type: str, expires_in: Optional[int] = None, bucket: Optional[str] = None) -> str:
    """
    Generate presigned PUT URL for direct upload.
    Synchronous; async callers use async_generate_presigned_put_url.
    """
    bucket = _bucket(bucket)
    client = _get_s3_client()
    try:
        return client.generate_presigned_url(
            "put_object",
            Params={"Bucket": bucket, "Key": key, "ContentType": content_type},
            ExpiresIn=expires_in or settings.PRESIGN_EXPIRES,
            HttpMethod="PUT",
        )
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Presigning PUT for %s failed", key)
        raise InternalError("Could not create upload URL") from exc


def generate_presigned_get_url(key: str, expires_in: int = VIEW_URL_EXPIRES, bucket: Optional[str] = None) -> str:
    bucket = _bucket(bucket)
    client = _get_s3_client()
    try:
        return client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in,
        )
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Presigning GET for %s failed", key)
        raise InternalError("Could not create file URL") from exc


async def async_generate_presigned_put_url(key: str, content_type: str, expires_in: Optional[int] = None, bucket: Optional[str] = None) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_thread_pool, generate_presigned_put_url, key, content_type, expires_in, bucket)


async def async_generate_presigned_get_url(key: str, expires_in: int = VIEW_URL_EXPIRES, bucket: Optional[str] = None) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_thread_pool, generate_presigned_get_url, key, expires_in, bucket)
