from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from ..core.database import get_session
from ..core.exceptions import Forbidden, Unauthenticated
from ..models.AuthToken import Identity
from ..users.service import find_user_by_id
from .permissions import PermissionRegistry
from .tokens import TokenService

# OAuth2 scheme (for extracting token from header); missing header -> 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service

def get_permission_registry(request: Request) -> PermissionRegistry:
    return request.app.state.permission_registry


async def get_current_identity(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    session: Session = Depends(get_session),
) -> Identity:
    if not token:
        raise Unauthenticated()

    claims = tokens.verify(token)

    if not request.app.state.resolve_role_per_request:
        # Role is trusted from the token until it expires
        return Identity(id=claims.sub, email=claims.email, role=claims.role)

    user = find_user_by_id(session, claims.sub)
    if user is None:
        raise Unauthenticated()
    return Identity(id=user.id, email=user.email, role=user.role)


def require_operation(operation: str):
    """
    Builds the authorization guard for one named operation.

    The required permissions are looked up in the registry on every request,
    after the token has been verified (401 always wins over 403).
    """
    async def guard(
        identity: Annotated[Identity, Depends(get_current_identity)],
        registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
    ) -> Identity:
        if not registry.can_perform(identity.role, operation):
            raise Forbidden()
        return identity

    guard.__name__ = f"require_{operation.replace('.', '_')}"
    return guard
