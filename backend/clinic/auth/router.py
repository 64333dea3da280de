from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..core.database import get_session
from ..models.AuthToken import Identity
from ..models.User import AuthResponse, LoginRequest, UserCreate, UserResponse
from ..users.service import get_user
from .dependencies import get_current_identity, get_token_service
from .service import login_user, register_user
from .tokens import TokenService

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    registration: UserCreate,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    session: Session = Depends(get_session)
):
    """
    Register a new user. The role defaults to STAFF.
    """
    return await register_user(session, tokens, registration)

@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    session: Session = Depends(get_session)
):
    """
    Login with email and password to get an access token.
    """
    return await login_user(session, tokens, login_data.email, login_data.password)

@router.get("/me", response_model=UserResponse)
async def read_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
    session: Session = Depends(get_session)
):
    """
    Get the current user's information.
    """
    return get_user(session, identity.id)
