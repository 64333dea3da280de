from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..auth.dependencies import require_operation
from ..core.database import get_session
from ..models.AuthToken import Identity
from ..models.Treatment import Treatment, TreatmentCreate, TreatmentResponse, TreatmentUpdate
from . import service

router = APIRouter(prefix="/treatments", tags=["treatments"])


def to_response(treatment: Treatment) -> TreatmentResponse:
    # Read while the session is open so the patient can be lazy-loaded
    return TreatmentResponse.model_validate(treatment)


@router.post("", response_model=TreatmentResponse, status_code=status.HTTP_201_CREATED)
async def create_treatment(
    treatment: TreatmentCreate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatments.create"))
):
    """
    Create a new treatment. Every referenced treatment option and medication
    slug must exist and be active.
    """
    return to_response(service.create_treatment(session, treatment, current_user))

@router.get("", response_model=list[TreatmentResponse])
async def list_treatments(
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatments.list"))
):
    """
    Get all treatments.
    """
    return [to_response(t) for t in service.get_all_treatments(session)]

@router.get("/patient/{patient_id}", response_model=list[TreatmentResponse])
async def list_treatments_for_patient(
    patient_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatments.list_by_patient"))
):
    """
    Get all treatments for a patient.
    """
    return [to_response(t) for t in service.get_treatments_for_patient(session, patient_id)]

@router.get("/{treatment_id}", response_model=TreatmentResponse)
async def get_treatment(
    treatment_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatments.get"))
):
    return to_response(service.get_treatment(session, treatment_id))

@router.patch("/{treatment_id}", response_model=TreatmentResponse)
async def update_treatment(
    treatment_id: str,
    update_data: TreatmentUpdate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatments.update"))
):
    """
    Update a treatment. Slug lists that are sent are validated again.
    """
    return to_response(service.update_treatment(session, treatment_id, update_data))

@router.delete("/{treatment_id}", response_model=TreatmentResponse)
async def delete_treatment(
    treatment_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatments.delete"))
):
    return to_response(service.delete_treatment(session, treatment_id))
