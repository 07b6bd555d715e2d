# tests/test_applications_api.py
import re

import pytest


@pytest.mark.asyncio
async def test_apply_writes_pending_application(api_client, memory_store):
    payload = {"cvFileKey": "cvs/1700000000000_abc1234_cv.pdf", "coverLetter": "Hello", "allowSearch": True}
    r = await api_client.post("/jobs/42/apply", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["jobId"] == "42"
    assert body["cvFileKey"] == payload["cvFileKey"]
    assert re.fullmatch(r"app_\d{13}_[0-9a-z]{7}", body["applicationId"])

    stored = memory_store.get(body["applicationId"])
    assert stored["status"] == "pending"
    assert stored["jobId"] == "42"
    assert stored["coverLetter"] == "Hello"
    assert stored["allowSearch"] is True
    assert stored["submittedAt"] == body["submittedAt"]


@pytest.mark.asyncio
async def test_apply_defaults_optional_fields(api_client, memory_store):
    r = await api_client.post("/jobs/7/apply", json={"cvFileKey": "cvs/x.pdf"})
    stored = memory_store.get(r.json()["applicationId"])
    assert stored["coverLetter"] == ""
    assert stored["allowSearch"] is False


@pytest.mark.asyncio
async def test_apply_without_cv_key_writes_nothing(api_client, memory_store):
    r = await api_client.post("/jobs/42/apply", json={"coverLetter": "Hi"})
    assert r.status_code == 400
    assert r.json()["code"] == "validation_error"
    assert len(memory_store) == 0


@pytest.mark.asyncio
async def test_apply_without_body_is_rejected(api_client, memory_store):
    r = await api_client.post("/jobs/42/apply")
    assert r.status_code == 400
    assert len(memory_store) == 0


@pytest.mark.asyncio
async def test_apply_with_blank_job_id_is_rejected(api_client, memory_store):
    r = await api_client.post("/jobs/%22%20%22/apply", json={"cvFileKey": "cvs/x.pdf"})
    assert r.status_code == 400
    assert len(memory_store) == 0


@pytest.mark.asyncio
async def test_applications_are_not_listed_as_jobs(api_client, memory_store):
    memory_store.put({"id": "42", "title": "Engineer"})
    await api_client.post("/jobs/42/apply", json={"cvFileKey": "cvs/x.pdf"})
    r = await api_client.get("/jobs")
    assert [job["id"] for job in r.json()] == ["42"]
