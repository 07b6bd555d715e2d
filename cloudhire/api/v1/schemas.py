# cloudhire/api/v1/schemas.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MessageResp(BaseModel):
    message: str
    item: Optional[Dict[str, Any]] = None


class DeleteResp(BaseModel):
    message: str
    deletedId: str


class ApplyResp(BaseModel):
    success: bool = True
    applicationId: str
    jobId: str
    cvFileKey: str
    submittedAt: str


class PresignRequest(BaseModel):
    fileName: str = Field(..., min_length=1)
    fileType: str
    fileSize: Optional[int] = None


class PresignResponse(BaseModel):
    uploadUrl: str
    fileKey: str
    expiresIn: int


class FileUrlResponse(BaseModel):
    url: str
    expiresIn: int
