# cloudhire/services/applications.py
import logging
from typing import Any, Dict

from cloudhire.core.errors import ValidationError
from cloudhire.db.store import RecordStore
from cloudhire.services.jobs import require_object
from cloudhire.utils.ids import generate_application_id, normalize_id, now_iso

logger = logging.getLogger(__name__)

PENDING = "pending"


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def submit_application(store: RecordStore, raw_job_id: Any, body: Any) -> Dict[str, Any]:
    """
    Write an application record for POST /jobs/{jobId}/apply.

    The job id is not checked against existing jobs and the CV key is not
    checked against the object store; both are references only.
    """
    job_id = normalize_id(raw_job_id)
    if not job_id:
        raise ValidationError("Job ID is required in path parameter")
    body = require_object(body)
    cv_file_key = body.get("cvFileKey")
    if not isinstance(cv_file_key, str) or not cv_file_key.strip():
        raise ValidationError("CV file key is required")
    cv_file_key = cv_file_key.strip()

    application_id = generate_application_id()
    record = {
        "id": application_id,
        "applicationId": application_id,
        "jobId": job_id,
        "cvFileKey": cv_file_key,
        "coverLetter": body.get("coverLetter") or "",
        "allowSearch": _as_bool(body.get("allowSearch", False)),
        "status": PENDING,
        "submittedAt": now_iso(),
    }
    store.put(record)
    logger.info("Application %s submitted for job %s", application_id, job_id)

    return {
        "success": True,
        "applicationId": application_id,
        "jobId": job_id,
        "cvFileKey": cv_file_key,
        "submittedAt": record["submittedAt"],
    }
