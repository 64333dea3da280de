import logging

from sqlmodel import Session

from ..core.exceptions import InvalidCredentials
from ..core.security import burn_password_check, verify_password
from ..models.User import AuthResponse, User, UserCreate
from ..users.service import create_user, find_user_by_email
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _auth_response(tokens: TokenService, user: User) -> AuthResponse:
    token = tokens.issue(user.id, user.email, user.role)
    return AuthResponse(id=user.id, email=user.email, name=user.name, role=user.role, token=token)

async def authenticate_user(session: Session, email: str, password: str) -> User | None:
    user = find_user_by_email(session, email)
    if not user:
        burn_password_check()
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user

async def register_user(session: Session, tokens: TokenService, registration: UserCreate) -> AuthResponse:
    user = create_user(session, registration)
    logger.info("Registered %s as %s", user.email, user.role.value)
    return _auth_response(tokens, user)

async def login_user(session: Session, tokens: TokenService, email: str, password: str) -> AuthResponse:
    user = await authenticate_user(session, email, password)
    if not user:
        logger.warning("Failed login attempt")
        raise InvalidCredentials()
    return _auth_response(tokens, user)
