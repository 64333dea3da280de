from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field

from .Base import CamelModel, Timestamps, new_id


class Patient(Timestamps, table=True):
    __tablename__ = "patients"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(nullable=False)
    # Clinic-issued code, e.g. "P123456"
    patient_id: str = Field(unique=True, index=True, nullable=False)


class PatientCreate(CamelModel):
    name: str
    patient_id: str

    @field_validator("name", "patient_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("should not be empty")
        return value.strip()


class PatientUpdate(CamelModel):
    name: str | None = None
    patient_id: str | None = None

    @field_validator("name", "patient_id")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("should not be empty")
        return value.strip() if value is not None else None


class PatientResponse(CamelModel):
    id: str
    name: str
    patient_id: str
    created_at: datetime
    updated_at: datetime
