from passlib.context import CryptContext

from .settings import settings

# Password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=102400,
    argon2__parallelism=8
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password + settings.PASSWORD_PEPPER, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password + settings.PASSWORD_PEPPER)

def burn_password_check() -> None:
    """Spends one hash verification so unknown emails cost as much as wrong passwords."""
    pwd_context.dummy_verify()
