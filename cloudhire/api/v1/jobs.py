# cloudhire/api/v1/jobs.py
import asyncio
import functools
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request

from cloudhire.api.v1.auth import get_current_user
from cloudhire.api.v1.schemas import DeleteResp, MessageResp
from cloudhire.core.errors import ValidationError
from cloudhire.db.store import RecordStore, get_store
from cloudhire.services import jobs as job_service
from cloudhire.services.jobs import resolve_id

logger = logging.getLogger(__name__)

router = APIRouter()


async def run_blocking(fn, *args, **kwargs):
    # store calls are blocking (boto3); keep them off the event loop
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("Body must be valid JSON")


@router.get("/jobs")
async def list_jobs(
    id: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
):
    """
    Without ?id= this lists valid jobs (bare array, or a {jobs,total,page,limit}
    envelope when page/limit are given). With ?id= it returns one record.
    """
    if id is not None:
        return await run_blocking(job_service.get_job, store, id)
    return await run_blocking(job_service.list_jobs, store, page, limit)


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, id: Optional[str] = Query(None), store: RecordStore = Depends(get_store)):
    return await run_blocking(job_service.get_job, store, resolve_id(id, job_id))


@router.post("/jobs", status_code=201, response_model=MessageResp)
async def create_job(request: Request, store: RecordStore = Depends(get_store), user=Depends(get_current_user)):
    body = await read_json_body(request)
    item = await run_blocking(job_service.create_job, store, body)
    return {"message": "Created", "item": item}


@router.put("/jobs", response_model=MessageResp)
async def update_job_by_query(request: Request, id: Optional[str] = Query(None), store: RecordStore = Depends(get_store), user=Depends(get_current_user)):
    body = await read_json_body(request)
    _, item = await run_blocking(job_service.update_job, store, body, query_id=id)
    return {"message": "Updated successfully", "item": item}


@router.put("/jobs/{job_id}", response_model=MessageResp)
async def update_job(job_id: str, request: Request, id: Optional[str] = Query(None), store: RecordStore = Depends(get_store), user=Depends(get_current_user)):
    body = await read_json_body(request)
    _, item = await run_blocking(job_service.update_job, store, body, query_id=id, path_id=job_id)
    return {"message": "Updated successfully", "item": item}


@router.delete("/jobs", response_model=DeleteResp)
async def delete_job_by_query(id: Optional[str] = Query(None), store: RecordStore = Depends(get_store), user=Depends(get_current_user)):
    deleted = await run_blocking(job_service.delete_job, store, query_id=id)
    return {"message": f"Deleted item with ID: {deleted}", "deletedId": deleted}


@router.delete("/jobs/{job_id}", response_model=DeleteResp)
async def delete_job(job_id: str, id: Optional[str] = Query(None), store: RecordStore = Depends(get_store), user=Depends(get_current_user)):
    deleted = await run_blocking(job_service.delete_job, store, query_id=id, path_id=job_id)
    return {"message": f"Deleted item with ID: {deleted}", "deletedId": deleted}
