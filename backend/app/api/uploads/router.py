from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.api.uploads import service
from app.api.uploads.schemas import (
    DocumentUploadResponse,
    ImageUploadResponse,
    LocalUploadResponse,
)
from app.config import settings
from app.core.auth.dependencies import AdminActor, AuthActor
from app.core.storage.service import (
    LocalStorage,
    S3Storage,
    get_local_storage,
    get_storage,
)

router = APIRouter(prefix="/file-upload")

StorageDep = Annotated[S3Storage, Depends(get_storage)]
LocalStorageDep = Annotated[LocalStorage, Depends(get_local_storage)]


@router.post(
    "/minio/image",
    summary="Upload an image with a thumbnail",
    status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    actor: AuthActor,
    storage: StorageDep,
    file: UploadFile = File(...),
    folder: Annotated[str, Query()] = "general",
) -> ImageUploadResponse:
    data = await service.read_image(file)
    return await storage.upload_image(data, file.filename, file.content_type, folder)


@router.post(
    "/minio/document",
    summary="Upload a document",
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    actor: AuthActor,
    storage: StorageDep,
    file: UploadFile = File(...),
    folder: Annotated[str, Query()] = "documents",
) -> DocumentUploadResponse:
    data = await service.read_document(file)
    return await storage.upload_document(
        data, file.filename, file.content_type, folder
    )


@router.delete("/minio/image/{filename:path}", summary="Delete an image")
async def delete_image(filename: str, actor: AdminActor, storage: StorageDep):
    await storage.delete_image(filename)
    return {"message": "Image deleted successfully"}


@router.delete("/minio/document/{filename:path}", summary="Delete a document")
async def delete_document(filename: str, actor: AdminActor, storage: StorageDep):
    await storage.delete_document(filename)
    return {"message": "Document deleted successfully"}


@router.post(
    "/image",
    summary="Upload an image to local disk",
    status_code=status.HTTP_201_CREATED,
)
async def upload_local_image(
    actor: AuthActor, storage: LocalStorageDep, file: UploadFile = File(...)
) -> LocalUploadResponse:
    data = await service.read_local_file(
        file,
        service.LOCAL_IMAGE_EXTENSIONS,
        settings.LOCAL_MAX_IMAGE_SIZE,
        "Only image files are allowed!",
    )
    return await storage.save(data, file.filename, "images")


@router.post(
    "/document",
    summary="Upload a document to local disk",
    status_code=status.HTTP_201_CREATED,
)
async def upload_local_document(
    actor: AuthActor, storage: LocalStorageDep, file: UploadFile = File(...)
) -> LocalUploadResponse:
    data = await service.read_local_file(
        file,
        service.LOCAL_DOCUMENT_EXTENSIONS,
        settings.LOCAL_MAX_DOCUMENT_SIZE,
        "Only PDF and Word documents are allowed!",
    )
    return await storage.save(data, file.filename, "documents")
