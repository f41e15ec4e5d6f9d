"""
Tests for object storage and local disk uploads.
"""

import io
import threading

import pytest
from botocore.exceptions import ClientError
from httpx import AsyncClient
from PIL import Image

from app.asgi import application
from app.core.storage import service as storage_service
from app.core.storage.service import (
    LocalStorage,
    S3Storage,
    get_local_storage,
    get_storage,
    make_thumbnail,
)
from factories import auth_headers


class FakeS3Client:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.objects = {}

    def put_object(self, Bucket, Key, Body, ContentType, Metadata):
        if self.fail:
            error = {"Error": {"Code": "500", "Message": "boom"}}
            raise ClientError(error, "PutObject")
        self.objects[(Bucket, Key)] = (Body, ContentType)

    def delete_object(self, Bucket, Key):
        self.objects.pop((Bucket, Key), None)


def png_bytes(size=(640, 480)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", size, (200, 30, 30, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def s3_client():
    client = FakeS3Client()
    application.dependency_overrides[get_storage] = lambda: S3Storage(client)
    return client


@pytest.fixture
def local_root(tmp_path):
    application.dependency_overrides[get_local_storage] = lambda: LocalStorage(
        tmp_path
    )
    return tmp_path


def test_thumbnail_is_cropped_jpeg():
    thumb = Image.open(io.BytesIO(make_thumbnail(png_bytes(), 300, 200)))
    assert thumb.format == "JPEG"
    assert thumb.size == (300, 200)


@pytest.mark.asyncio
async def test_upload_image(client: AsyncClient, user, s3_client):
    response = await client.post(
        "/api/v1/file-upload/minio/image",
        params={"folder": "events"},
        files={"file": ("Cover Photo.png", png_bytes(), "image/png")},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    data = response.json()
    key = data["filename"]
    assert key.startswith("events/cover-photo-")
    assert key.endswith(".png")
    assert data["originalUrl"].endswith(f"/images/{key}")
    assert data["thumbnailUrl"].endswith(f"/thumbnails/{key}")
    assert data["mimetype"] == "image/png"
    assert set(s3_client.objects) == {("images", key), ("thumbnails", key)}
    assert s3_client.objects[("thumbnails", key)][1] == "image/jpeg"


@pytest.mark.asyncio
async def test_upload_image_rejects_wrong_type(client: AsyncClient, user, s3_client):
    response = await client.post(
        "/api/v1/file-upload/minio/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Invalid image type. Only JPG, JPEG, PNG, GIF, and WebP are allowed."
    )
    assert s3_client.objects == {}


@pytest.mark.asyncio
async def test_upload_corrupt_image(client: AsyncClient, user, s3_client):
    response = await client.post(
        "/api/v1/file-upload/minio/image",
        files={"file": ("broken.png", b"not really a png", "image/png")},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid image file"


@pytest.mark.asyncio
async def test_upload_document_storage_failure(client: AsyncClient, user):
    application.dependency_overrides[get_storage] = lambda: S3Storage(
        FakeS3Client(fail=True)
    )
    response = await client.post(
        "/api/v1/file-upload/minio/document",
        files={"file": ("agenda.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers(user),
    )
    assert response.status_code == 500
    assert response.json()["message"] == "Failed to upload document"


@pytest.mark.asyncio
async def test_upload_document(client: AsyncClient, user, s3_client):
    response = await client.post(
        "/api/v1/file-upload/minio/document",
        files={"file": ("agenda.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["filename"].startswith("documents/agenda-")
    assert data["size"] == 8


@pytest.mark.asyncio
async def test_delete_image_admin_only(
    client: AsyncClient, user, admin, s3_client
):
    s3_client.objects[("images", "general/a.png")] = (b"", "image/png")
    s3_client.objects[("thumbnails", "general/a.png")] = (b"", "image/jpeg")

    denied = await client.delete(
        "/api/v1/file-upload/minio/image/general/a.png", headers=auth_headers(user)
    )
    assert denied.status_code == 403

    response = await client.delete(
        "/api/v1/file-upload/minio/image/general/a.png", headers=auth_headers(admin)
    )
    assert response.status_code == 200
    assert s3_client.objects == {}


@pytest.mark.asyncio
async def test_local_image_upload(client: AsyncClient, user, local_root):
    response = await client.post(
        "/api/v1/file-upload/image",
        files={"file": ("badge.JPG", b"jpeg-bytes", "image/jpeg")},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["originalname"] == "badge.JPG"
    assert data["path"] == f"/uploads/images/{data['filename']}"
    assert (local_root / "images" / data["filename"]).read_bytes() == b"jpeg-bytes"


@pytest.mark.asyncio
async def test_local_document_rejects_extension(
    client: AsyncClient, user, local_root
):
    response = await client.post(
        "/api/v1/file-upload/document",
        files={"file": ("script.exe", b"MZ", "application/octet-stream")},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Only PDF and Word documents are allowed!"


@pytest.mark.asyncio
async def test_local_upload_size_limit(client: AsyncClient, user, local_root):
    response = await client.post(
        "/api/v1/file-upload/image",
        files={"file": ("huge.png", b"0" * (5 * 1024 * 1024 + 1), "image/png")},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "File size too large. Maximum 5MB allowed."


@pytest.mark.asyncio
async def test_upload_requires_login(client: AsyncClient, s3_client):
    response = await client.post(
        "/api/v1/file-upload/minio/document",
        files={"file": ("agenda.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_thumbnail_built_off_the_event_loop(monkeypatch):
    loop_thread = threading.get_ident()
    threads = []

    def recording_thumbnail(data, *args):
        threads.append(threading.get_ident())
        return make_thumbnail(data, *args)

    monkeypatch.setattr(storage_service, "make_thumbnail", recording_thumbnail)
    client = FakeS3Client()
    result = await S3Storage(client).upload_image(
        png_bytes(), "cover.png", "image/png"
    )

    assert threads and threads[0] != loop_thread
    assert ("thumbnails", result["filename"]) in client.objects
