# cloudhire/api/v1/uploads.py
"""
CV upload endpoints.
- POST /upload/presigned-url: validate the file metadata, build a cvs/ key
  and return a presigned PUT URL for the browser to upload to directly.
- GET /upload/url?key=...: presigned GET URL to view an uploaded CV.
"""
from fastapi import APIRouter, Depends, Query

from cloudhire.api.v1.auth import get_current_user
from cloudhire.api.v1.schemas import FileUrlResponse, PresignRequest, PresignResponse
from cloudhire.core.config import settings
from cloudhire.core.errors import ValidationError
from cloudhire.services import storage

router = APIRouter()


@router.post("/upload/presigned-url", response_model=PresignResponse)
async def presign_upload(req: PresignRequest, user=Depends(get_current_user)):
    storage.validate_cv_file(req.fileName, req.fileType, req.fileSize)
    key = storage.build_cv_key(req.fileName)
    expires = settings.PRESIGN_EXPIRES
    upload_url = await storage.async_generate_presigned_put_url(key, req.fileType, expires_in=expires)
    return PresignResponse(uploadUrl=upload_url, fileKey=key, expiresIn=expires)


@router.get("/upload/url", response_model=FileUrlResponse)
async def file_url(key: str = Query("")):
    key = key.strip()
    if not key:
        raise ValidationError("key is required")
    url = await storage.async_generate_presigned_get_url(key)
    return FileUrlResponse(url=url, expiresIn=storage.VIEW_URL_EXPIRES)
