"""
HTTP errors raised by the services.

Each one is an HTTPException so FastAPI renders it directly; the subclasses
exist so callers (and tests) can tell the failure kinds apart.
"""
from fastapi import HTTPException, status


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentials(HTTPException):
    # Same message for unknown email and wrong password.
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    # Never says which permission was missing.
    def __init__(self):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden resource")


class AlreadyExists(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class NotFound(HTTPException):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} with ID {entity_id} not found",
        )


class ReferenceNotFound(HTTPException):
    def __init__(self, collection: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"One or more {collection} not found",
        )
        self.collection = collection
