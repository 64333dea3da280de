from datetime import datetime

from pydantic import field_validator
from sqlalchemy import Column, JSON
from sqlmodel import Field, Relationship

from .Base import CamelModel, Timestamps, new_id
from .Patient import Patient, PatientResponse


def unique_slugs(slugs: list[str]) -> list[str]:
    """Drops blanks and repeats, keeping first-seen order."""
    seen: list[str] = []
    for slug in slugs:
        slug = slug.strip()
        if slug and slug not in seen:
            seen.append(slug)
    return seen


class Treatment(Timestamps, table=True):
    __tablename__ = "treatments"

    id: str = Field(default_factory=new_id, primary_key=True)
    date: datetime
    # Slugs of TreatmentOption / Medication rows, validated at write time only
    treatment_options: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    medications: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    cost_of_treatment: float
    patient_id: str = Field(foreign_key="patients.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)

    # Loaded for responses, even when the patient was soft-deleted later
    patient: Patient = Relationship()


class TreatmentCreate(CamelModel):
    date: datetime
    treatment_options: list[str]
    medications: list[str]
    cost_of_treatment: float
    patient_id: str

    @field_validator("treatment_options", "medications")
    @classmethod
    def dedupe(cls, value: list[str]) -> list[str]:
        return unique_slugs(value)

    @field_validator("cost_of_treatment")
    @classmethod
    def cost_not_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("costOfTreatment must not be negative")
        return value


class TreatmentUpdate(CamelModel):
    # None means "leave as stored"
    date: datetime | None = None
    treatment_options: list[str] | None = None
    medications: list[str] | None = None
    cost_of_treatment: float | None = None
    patient_id: str | None = None

    @field_validator("treatment_options", "medications")
    @classmethod
    def dedupe(cls, value: list[str] | None) -> list[str] | None:
        return unique_slugs(value) if value is not None else None

    @field_validator("cost_of_treatment")
    @classmethod
    def cost_not_negative(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("costOfTreatment must not be negative")
        return value


class TreatmentResponse(CamelModel):
    id: str
    date: datetime
    treatment_options: list[str]
    medications: list[str]
    cost_of_treatment: float
    patient_id: str
    user_id: str
    patient: PatientResponse
    created_at: datetime
    updated_at: datetime
