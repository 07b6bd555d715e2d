import re

import pytest

from cloudhire.core.config import settings
from cloudhire.core.errors import ValidationError
from cloudhire.services import storage

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DummyS3Client:
    def __init__(self):
        self.calls = []

    def generate_presigned_url(self, operation, Params=None, ExpiresIn=None, HttpMethod=None):
        self.calls.append((operation, Params, ExpiresIn, HttpMethod))
        return f"https://example.com/fake-presign/{Params['Key']}?op={operation}"


@pytest.fixture
def s3(monkeypatch):
    client = DummyS3Client()

    def fake_boto_client(name, **kwargs):
        assert name == "s3"
        return client

    monkeypatch.setattr("boto3.client", fake_boto_client)
    monkeypatch.setattr(settings, "S3_BUCKET", "cloudhire-cvs")
    return client


def test_validate_cv_file_accepts_pdf_and_word():
    storage.validate_cv_file("cv.pdf", PDF, 1024)
    storage.validate_cv_file("cv.doc", "application/msword")
    storage.validate_cv_file("cv.docx", DOCX, settings.CV_MAX_BYTES)


@pytest.mark.parametrize(
    "file_name,content_type,size",
    [
        ("cv.png", "image/png", 10),
        ("cv.pdf", None, 10),
        ("cv.pdf", PDF, 5 * 1024 * 1024 + 1),
        ("cv.pdf", PDF, 0),
        ("", PDF, 10),
        (None, PDF, 10),
    ],
)
def test_validate_cv_file_rejects(file_name, content_type, size):
    with pytest.raises(ValidationError):
        storage.validate_cv_file(file_name, content_type, size)


def test_cv_key_is_prefixed_and_sanitized():
    key = storage.build_cv_key("../My CV (final).pdf")
    assert re.fullmatch(r"cvs/\d{13}_[0-9a-z]{7}_My_CV_final_.pdf", key)
    assert storage.sanitize_file_name("...") == "cv"


@pytest.mark.asyncio
async def test_presigned_url_endpoint(api_client, s3):
    r = await api_client.post(
        "/upload/presigned-url",
        json={"fileName": "resume.pdf", "fileType": PDF, "fileSize": 2048},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["fileKey"].startswith("cvs/")
    assert data["fileKey"].endswith("_resume.pdf")
    assert data["uploadUrl"].startswith("https://example.com/fake-presign/")
    assert data["expiresIn"] == settings.PRESIGN_EXPIRES

    operation, params, expires, method = s3.calls[0]
    assert operation == "put_object"
    assert params == {"Bucket": "cloudhire-cvs", "Key": data["fileKey"], "ContentType": PDF}
    assert method == "PUT"


@pytest.mark.asyncio
async def test_presigned_url_rejects_wrong_type(api_client, s3):
    r = await api_client.post("/upload/presigned-url", json={"fileName": "cv.exe", "fileType": "application/x-msdownload"})
    assert r.status_code == 400
    assert r.json()["code"] == "validation_error"
    assert s3.calls == []


@pytest.mark.asyncio
async def test_presigned_url_rejects_large_file(api_client, s3):
    r = await api_client.post(
        "/upload/presigned-url",
        json={"fileName": "cv.pdf", "fileType": PDF, "fileSize": settings.CV_MAX_BYTES + 1},
    )
    assert r.status_code == 400
    assert "too large" in r.json()["error"]


@pytest.mark.asyncio
async def test_presigned_url_requires_file_name(api_client, s3):
    r = await api_client.post("/upload/presigned-url", json={"fileType": PDF})
    assert r.status_code == 400
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_presigned_url_without_bucket_is_internal_error(api_client, s3, monkeypatch):
    monkeypatch.setattr(settings, "S3_BUCKET", None)
    r = await api_client.post("/upload/presigned-url", json={"fileName": "cv.pdf", "fileType": PDF})
    assert r.status_code == 500
    assert r.json() == {"error": "S3 bucket not configured", "code": "internal_error"}


@pytest.mark.asyncio
async def test_file_url_endpoint(api_client, s3):
    r = await api_client.get("/upload/url", params={"key": "cvs/1_abc_cv.pdf"})
    assert r.status_code == 200
    assert r.json()["expiresIn"] == storage.VIEW_URL_EXPIRES
    operation, params, expires, _ = s3.calls[0]
    assert operation == "get_object"
    assert params == {"Bucket": "cloudhire-cvs", "Key": "cvs/1_abc_cv.pdf"}
    assert expires == storage.VIEW_URL_EXPIRES


@pytest.mark.asyncio
async def test_file_url_requires_key(api_client, s3):
    r = await api_client.get("/upload/url")
    assert r.status_code == 400
    assert r.json()["error"] == "key is required"
