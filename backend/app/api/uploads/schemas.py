from pydantic import Field

from app.core.response.base_model import CustomBaseModel


class ImageUploadResponse(CustomBaseModel):
    original_url: str = Field(...)
    thumbnail_url: str = Field(...)
    filename: str = Field(...)
    size: int = Field(...)
    mimetype: str = Field(...)


class DocumentUploadResponse(CustomBaseModel):
    document_url: str = Field(...)
    filename: str = Field(...)
    size: int = Field(...)
    mimetype: str = Field(...)


class LocalUploadResponse(CustomBaseModel):
    filename: str = Field(...)
    originalname: str = Field(...)
    path: str = Field(...)
