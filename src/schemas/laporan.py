"""Schemas untuk laporan tugas."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from src.schemas.surat_tugas import AssignmentResponse


class ReportSubmit(BaseModel):
    """
    Schema untuk upload/edit laporan.

    Text is only normalized here; the minimum photo count and the required
    narrative/outcome are checked by the service so every entry point gets
    the same rejection.
    """

    uraian: str = Field("", description="Uraian pelaksanaan")
    hasil: str = Field("", description="Hasil yang dicapai")
    kendala: Optional[str] = None
    solusi: Optional[str] = None
    documentation_photos: List[str] = Field(default_factory=list, description="Foto dokumentasi (data URL atau link)")

    @field_validator("kendala", "solusi")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("documentation_photos")
    @classmethod
    def drop_empty_photos(cls, photos: List[str]) -> List[str]:
        return [photo for photo in photos if photo and photo.strip()]


class ReportListResponse(BaseModel):
    items: List[AssignmentResponse]
    total: int
    tab: Literal["all", "pending", "completed"]


class ReportStats(BaseModel):
    total: int
    pending: int
    completed: int
