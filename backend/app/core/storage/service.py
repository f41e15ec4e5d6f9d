"""Object storage for uploaded files.

``S3Storage`` talks to any S3-compatible endpoint (MinIO in development) and
keeps a resized copy of every image in a separate thumbnails bucket.
``LocalStorage`` writes to the public uploads directory served under
``/uploads``.
"""

import io
import logging
from functools import lru_cache
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool
from PIL import Image, ImageOps, UnidentifiedImageError

from app.config import settings
from app.core.utils.keys import generate_object_name
from app.core.validations.exceptions import RequestValidationError, UpstreamError

logger = logging.getLogger(__name__)


def make_thumbnail(
    data: bytes,
    width: int = settings.THUMBNAIL_WIDTH,
    height: int = settings.THUMBNAIL_HEIGHT,
) -> bytes:
    """Crop ``data`` to fill ``width`` x ``height`` and re-encode it as JPEG."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError):
        raise RequestValidationError("Invalid image file")

    img = ImageOps.exif_transpose(img)
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    thumb = ImageOps.fit(img, (width, height), Image.LANCZOS, centering=(0.5, 0.5))
    buffer = io.BytesIO()
    thumb.save(buffer, format="JPEG", quality=80)
    return buffer.getvalue()


class S3Storage:
    def __init__(self, client=None):
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
        )
        self.base_url = settings.S3_PUBLIC_URL.rstrip("/")

    def public_url(self, bucket: str, key: str) -> str:
        return f"{self.base_url}/{bucket}/{key}"

    def _put(self, bucket: str, key: str, data: bytes, content_type: str, name: str):
        self.client.put_object(
            Bucket=bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
            Metadata={"original-name": name or ""},
        )

    async def upload_image(
        self, data: bytes, filename: str, content_type: str, folder: str = "general"
    ) -> dict:
        key = generate_object_name(filename, prefix=f"{folder}/" if folder else "")
        thumbnail = await run_in_threadpool(make_thumbnail, data)
        try:
            await run_in_threadpool(
                self._put, settings.S3_IMAGES_BUCKET, key, data, content_type, filename
            )
            await run_in_threadpool(
                self._put,
                settings.S3_THUMBNAILS_BUCKET,
                key,
                thumbnail,
                "image/jpeg",
                filename,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error uploading image %s: %s", key, exc)
            raise UpstreamError("Failed to upload image")

        logger.info("Uploaded image %s", key)
        return {
            "original_url": self.public_url(settings.S3_IMAGES_BUCKET, key),
            "thumbnail_url": self.public_url(settings.S3_THUMBNAILS_BUCKET, key),
            "filename": key,
            "size": len(data),
            "mimetype": content_type,
        }

    async def upload_document(
        self, data: bytes, filename: str, content_type: str, folder: str = "documents"
    ) -> dict:
        key = generate_object_name(filename, prefix=f"{folder}/" if folder else "")
        try:
            await run_in_threadpool(
                self._put,
                settings.S3_DOCUMENTS_BUCKET,
                key,
                data,
                content_type,
                filename,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error uploading document %s: %s", key, exc)
            raise UpstreamError("Failed to upload document")

        logger.info("Uploaded document %s", key)
        return {
            "document_url": self.public_url(settings.S3_DOCUMENTS_BUCKET, key),
            "filename": key,
            "size": len(data),
            "mimetype": content_type,
        }

    async def _delete(self, buckets: list[str], key: str, kind: str):
        try:
            for bucket in buckets:
                await run_in_threadpool(self.client.delete_object, Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error deleting %s %s: %s", kind, key, exc)
            raise UpstreamError(f"Failed to delete {kind}")
        logger.info("Deleted %s %s", kind, key)

    async def delete_image(self, key: str):
        await self._delete(
            [settings.S3_IMAGES_BUCKET, settings.S3_THUMBNAILS_BUCKET], key, "image"
        )

    async def delete_document(self, key: str):
        await self._delete([settings.S3_DOCUMENTS_BUCKET], key, "document")


class LocalStorage:
    def __init__(self, root: str | Path = settings.UPLOAD_DIR):
        self.root = Path(root)

    def _write(self, path: Path, data: bytes):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def save(self, data: bytes, filename: str, subdir: str) -> dict:
        name = generate_object_name(filename)
        await run_in_threadpool(self._write, self.root / subdir / name, data)
        logger.info("Stored %s/%s on local disk", subdir, name)
        return {
            "filename": name,
            "originalname": filename,
            "path": f"/uploads/{subdir}/{name}",
        }


@lru_cache
def get_storage() -> S3Storage:
    return S3Storage()


def get_local_storage() -> LocalStorage:
    return LocalStorage()
