from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field

from .Base import CamelModel, Timestamps, new_id

# ==========================================
# Catalog entries referenced by slug from treatments
# ==========================================
class CatalogEntry(Timestamps):
    name: str = Field(nullable=False)
    # Unique among non-deleted rows, checked by the catalog service
    slug: str = Field(index=True, nullable=False)


class Medication(CatalogEntry, table=True):
    __tablename__ = "medications"

    id: str = Field(default_factory=new_id, primary_key=True)


class TreatmentOption(CatalogEntry, table=True):
    __tablename__ = "treatment_options"

    id: str = Field(default_factory=new_id, primary_key=True)

# ==========================================
# DTOs (shared by both catalogs)
# ==========================================
class CatalogEntryCreate(CamelModel):
    name: str
    slug: str

    @field_validator("name", "slug")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("should not be empty")
        return value.strip()


class CatalogEntryUpdate(CamelModel):
    name: str | None = None
    slug: str | None = None

    @field_validator("name", "slug")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("should not be empty")
        return value.strip() if value is not None else None


class CatalogEntryResponse(CamelModel):
    id: str
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
