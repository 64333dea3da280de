from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..auth.dependencies import require_operation
from ..core.database import get_session
from ..models.AuthToken import Identity
from ..models.Patient import PatientCreate, PatientResponse, PatientUpdate
from . import service

router = APIRouter(prefix="/patients", tags=["patients"])

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient: PatientCreate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("patients.create"))
):
    """
    Create a new patient.
    """
    return service.create_patient(session, patient)

@router.get("", response_model=list[PatientResponse])
async def list_patients(
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("patients.list"))
):
    """
    Get all patients.
    """
    return service.get_all_patients(session)

@router.get("/code/{patient_code}", response_model=PatientResponse)
async def get_patient_by_code(
    patient_code: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("patients.get_by_code"))
):
    """
    Look a patient up by the clinic-issued patient ID (e.g. P123456).
    """
    return service.get_patient_by_code(session, patient_code)

@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("patients.get"))
):
    return service.get_patient(session, patient_id)

@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: str,
    update_data: PatientUpdate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("patients.update"))
):
    return service.update_patient(session, patient_id, update_data)

@router.delete("/{patient_id}", response_model=PatientResponse)
async def delete_patient(
    patient_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("patients.delete"))
):
    """
    Soft-delete a patient. Existing treatments keep pointing at it.
    """
    return service.delete_patient(session, patient_id)
