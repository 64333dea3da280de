from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..auth.dependencies import require_operation
from ..catalog import service
from ..core.database import get_session
from ..models.AuthToken import Identity
from ..models.Catalog import CatalogEntryCreate, CatalogEntryResponse, CatalogEntryUpdate, TreatmentOption

# Mounted before the treatments router so "/treatments/options" is not read as an id
router = APIRouter(prefix="/treatments/options", tags=["treatment options"])

@router.post("", response_model=CatalogEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_treatment_option(
    option: CatalogEntryCreate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatment_options.create"))
):
    """
    Create a new treatment option.
    """
    return service.create_entry(session, TreatmentOption, option)

@router.get("", response_model=list[CatalogEntryResponse])
async def list_treatment_options(
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatment_options.list"))
):
    """
    Get all treatment options.
    """
    return service.list_active(session, TreatmentOption)

@router.patch("/{option_id}", response_model=CatalogEntryResponse)
async def update_treatment_option(
    option_id: str,
    update_data: CatalogEntryUpdate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatment_options.update"))
):
    return service.update_entry(session, TreatmentOption, option_id, update_data)

@router.delete("/{option_id}", response_model=CatalogEntryResponse)
async def delete_treatment_option(
    option_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("treatment_options.delete"))
):
    return service.delete_entry(session, TreatmentOption, option_id)
