from pydantic import BaseModel

from .Role import Role


class TokenClaims(BaseModel):
    sub: str # User ID
    email: str
    role: Role
    iat: int | None = None # Issued at time
    exp: int # Expiration time


class Identity(BaseModel):
    """The caller, as resolved from a verified token."""
    id: str
    email: str
    role: Role
