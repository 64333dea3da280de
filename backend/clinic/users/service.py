import logging

from sqlmodel import Session, select

from ..core.exceptions import AlreadyExists, NotFound
from ..core.security import get_password_hash
from ..models.Base import utcnow
from ..models.Role import Role
from ..models.User import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def find_user_by_email(session: Session, email: str, include_deleted: bool = False) -> User | None:
    statement = select(User).where(User.email == email.strip().lower())
    if not include_deleted:
        statement = statement.where(User.deleted_at == None)
    return session.exec(statement).first()

def find_user_by_id(session: Session, user_id: str) -> User | None:
    statement = select(User).where(User.id == user_id, User.deleted_at == None)
    return session.exec(statement).first()

def create_user(session: Session, user: UserCreate) -> User:
    # Emails are unique across deleted accounts too
    if find_user_by_email(session, user.email, include_deleted=True):
        raise AlreadyExists("Email already exists")

    db_user = User(
        email=user.email,
        name=user.name,
        hashed_password=get_password_hash(user.password),
        role=user.role or Role.STAFF,
    )
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    logger.info("Created user %s with role %s", db_user.id, db_user.role.value)
    return db_user

def get_all_users(session: Session) -> list[User]:
    statement = select(User).where(User.deleted_at == None).order_by(User.created_at)
    return session.exec(statement).all()

def get_user(session: Session, user_id: str) -> User:
    user = find_user_by_id(session, user_id)
    if not user:
        raise NotFound("User", user_id)
    return user

def update_user(session: Session, user_id: str, update_data: UserUpdate) -> User:
    user = get_user(session, user_id)

    if update_data.name is not None:
        user.name = update_data.name

    if update_data.email is not None and update_data.email != user.email:
        if find_user_by_email(session, update_data.email, include_deleted=True):
            raise AlreadyExists("Email already exists")
        user.email = update_data.email

    if update_data.password is not None:
        user.hashed_password = get_password_hash(update_data.password)

    user.updated_at = utcnow()
    session.add(user)
    session.commit()
    session.refresh(user)
    return user

def delete_user(session: Session, user_id: str) -> User:
    user = get_user(session, user_id)
    user.deleted_at = utcnow()
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Soft-deleted user %s", user_id)
    return user
