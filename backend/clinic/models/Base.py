from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ==========================================
# Shared columns for soft-deletable tables
# ==========================================
class Timestamps(SQLModel):
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    # NULL = active, set = soft-deleted
    deleted_at: datetime | None = Field(default=None, nullable=True, index=True)


# ==========================================
# Base for API DTOs (camelCase on the wire)
# ==========================================
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
