import os

from fastapi import UploadFile

from app.config import settings
from app.core.validations.exceptions import RequestValidationError

IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
DOCUMENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
LOCAL_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}
LOCAL_DOCUMENT_EXTENSIONS = {".pdf", ".doc", ".docx"}


def _megabytes(size: int) -> int:
    return size // (1024 * 1024)


async def read_upload(file: UploadFile, max_size: int) -> bytes:
    data = await file.read()
    if not data:
        raise RequestValidationError("File is required")
    if len(data) > max_size:
        raise RequestValidationError(
            f"File size too large. Maximum {_megabytes(max_size)}MB allowed."
        )
    return data


async def read_image(file: UploadFile) -> bytes:
    if file.content_type not in IMAGE_TYPES:
        raise RequestValidationError(
            "Invalid image type. Only JPG, JPEG, PNG, GIF, and WebP are allowed."
        )
    return await read_upload(file, settings.MAX_IMAGE_SIZE)


async def read_document(file: UploadFile) -> bytes:
    if file.content_type not in DOCUMENT_TYPES:
        raise RequestValidationError(
            "Invalid document type. Only PDF, DOC, and DOCX are allowed."
        )
    return await read_upload(file, settings.MAX_DOCUMENT_SIZE)


async def read_local_file(
    file: UploadFile, extensions: set[str], max_size: int, message: str
) -> bytes:
    _, extension = os.path.splitext(file.filename or "")
    if extension.lower() not in extensions:
        raise RequestValidationError(message)
    return await read_upload(file, max_size)
