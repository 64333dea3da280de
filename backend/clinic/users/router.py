from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..auth.dependencies import require_operation
from ..core.database import get_session
from ..models.AuthToken import Identity
from ..models.User import UserCreate, UserResponse, UserUpdate
from .service import create_user, delete_user, get_all_users, get_user, update_user

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_new_user(
    user: UserCreate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("users.create"))
):
    """
    Create a new user without logging them in.
    """
    return create_user(session, user)

@router.get("", response_model=list[UserResponse])
async def read_users(
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("users.list"))
):
    return get_all_users(session)

@router.get("/{user_id}", response_model=UserResponse)
async def read_user(
    user_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("users.get"))
):
    return get_user(session, user_id)

@router.patch("/{user_id}", response_model=UserResponse)
async def update_existing_user(
    user_id: str,
    update_data: UserUpdate,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("users.update"))
):
    """
    Update name, email or password. Roles cannot be changed.
    """
    return update_user(session, user_id, update_data)

@router.delete("/{user_id}", response_model=UserResponse)
async def delete_existing_user(
    user_id: str,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_operation("users.delete"))
):
    """
    Soft-delete a user. The account can no longer log in.
    """
    return delete_user(session, user_id)
