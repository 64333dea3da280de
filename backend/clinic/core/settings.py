import re
from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DURATION_REGEX = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> timedelta:
    """
    Parses an expiry such as "3600", "90s", "15m", "12h" or "1d".
    """
    match = DURATION_REGEX.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * DURATION_UNITS[unit])


class Settings(BaseSettings):
    PROJECT_NAME: str = "Clinic Records"
    DATABASE_URL: str = "sqlite:///./clinic.db"
    LOG_LEVEL: str = "INFO"

    # Auth Config
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "1d"
    RESOLVE_ROLE_PER_REQUEST: bool = False

    # Security
    PASSWORD_PEPPER: str = ""

    # Initial admin, created on startup when both are set
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None
    ADMIN_NAME: str = "Administrator"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("JWT_SECRET")
    @classmethod
    def secret_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET is not defined")
        return value

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def expiry_is_duration(cls, value: str) -> str:
        parse_duration(value)
        return value

    @property
    def token_expires_delta(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)


settings = Settings()
