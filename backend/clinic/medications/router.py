from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ..auth.dependencies import require_operation
from ..catalog import service
from ..core.database import get_session
from ..models.AuthToken import Identity
from ..models.Catalog import CatalogEntryCreate, CatalogEntryResponse, CatalogEntryUpdate, Medication

router = APIRouter(prefix="/medications", tags=["medications"])

@router.post("", response_model=CatalogEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_medication(
    medication: CatalogEntryCreate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.create"))
):
    """
    Create a new medication.
    """
    return service.create_entry(session, Medication, medication)

@router.get("", response_model=list[CatalogEntryResponse])
async def list_medications(
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.list"))
):
    """
    Get all medications, ordered by name.
    """
    return service.list_active(session, Medication)

@router.get("/search", response_model=list[CatalogEntryResponse])
async def search_medications(
    query: str | None = None,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.search"))
):
    """
    Search medications by name (case-insensitive).
    """
    return service.search_active(session, Medication, query)

@router.get("/active", response_model=list[CatalogEntryResponse])
async def list_active_medications(
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.active"))
):
    return service.list_active(session, Medication)

@router.get("/all", response_model=list[CatalogEntryResponse])
async def list_all_medications(
    include_deleted: bool = Query(False, alias="includeDeleted"),
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.all"))
):
    """
    Get all medications, optionally including deleted ones (Admin only).
    """
    return service.list_all(session, Medication, include_deleted)

@router.get("/{medication_id}", response_model=CatalogEntryResponse)
async def get_medication(
    medication_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.get"))
):
    """
    Get a medication by id, including soft-deleted ones.
    """
    return service.get_entry(session, Medication, medication_id)

@router.patch("/{medication_id}", response_model=CatalogEntryResponse)
async def update_medication(
    medication_id: str,
    update_data: CatalogEntryUpdate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.update"))
):
    return service.update_entry(session, Medication, medication_id, update_data)

@router.delete("/{medication_id}", response_model=CatalogEntryResponse)
async def delete_medication(
    medication_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("medications.delete"))
):
    """
    Soft-delete a medication. Treatments that already reference it are untouched.
    """
    return service.delete_entry(session, Medication, medication_id)
