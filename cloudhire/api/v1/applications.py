# cloudhire/api/v1/applications.py
from fastapi import APIRouter, Depends, Request

from cloudhire.api.v1.auth import get_current_user
from cloudhire.api.v1.jobs import read_json_body, run_blocking
from cloudhire.api.v1.schemas import ApplyResp
from cloudhire.db.store import RecordStore, get_store
from cloudhire.services.applications import submit_application

router = APIRouter()


@router.post("/jobs/{job_id}/apply", response_model=ApplyResp)
async def apply(job_id: str, request: Request, store: RecordStore = Depends(get_store), user=Depends(get_current_user)):
    """
    Body: {cvFileKey, coverLetter?, allowSearch?}. cvFileKey is the object key
    returned by POST /upload/presigned-url.
    """
    body = await read_json_body(request)
    return await run_blocking(submit_application, store, job_id, body)
