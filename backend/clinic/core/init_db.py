import logging

from sqlmodel import Session

from .database import engine
from .settings import settings
from ..models.Role import Role
from ..models.User import UserCreate
from ..users.service import create_user, find_user_by_email

logger = logging.getLogger(__name__)


def init_db():
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping initial admin")
        return

    with Session(engine) as session:
        if find_user_by_email(session, settings.ADMIN_EMAIL, include_deleted=True):
            logger.info("Admin user already exists.")
            return

        logger.info("Creating initial admin user: %s", settings.ADMIN_EMAIL)
        create_user(session, UserCreate(
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            role=Role.ADMIN,
        ))
