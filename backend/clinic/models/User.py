from datetime import datetime

from pydantic import EmailStr, field_validator
from sqlmodel import Field

from .Base import CamelModel, Timestamps, new_id
from .Role import Role

# ==========================================
# SQLModel (Database Entity)
# ==========================================
class User(Timestamps, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    email: str = Field(unique=True, index=True, nullable=False)
    name: str = Field(nullable=False)
    hashed_password: str = Field(nullable=False)
    role: Role = Field(default=Role.STAFF, nullable=False)

# ==========================================
# Pydantic Models (DTOs)
# ==========================================

# Properties to receive on registration / admin user creation
class UserCreate(CamelModel):
    name: str
    email: EmailStr
    password: str
    role: Role | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name should not be empty")
        return value.strip()

    # Emails are stored lowercased; lookups lowercase their input too
    @field_validator("email")
    @classmethod
    def email_lowercase(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("password must be longer than or equal to 6 characters")
        return value

# Properties to receive via API on login
class LoginRequest(CamelModel):
    # Plain str: a malformed email must fail exactly like an unknown one
    email: str
    password: str

# Role is not updatable
class UserUpdate(CamelModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, value: str | None) -> str | None:
        return value.lower() if value is not None else None

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value: str | None) -> str | None:
        if value is not None and len(value) < 6:
            raise ValueError("password must be longer than or equal to 6 characters")
        return value

# Properties to return via API
class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime
    updated_at: datetime

# Returned by register and login
class AuthResponse(CamelModel):
    id: str
    email: str
    name: str
    role: Role
    token: str
