"""Identity service: registration, login, token resolution and profile edits."""
import logging
import uuid
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.config import Settings
from ..core.errors import AuthenticationError, InvalidInputError
from ..core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from ..models.user import User, utcnow
from ..schemas.user import UserCreate, UserLogin, UserUpdate

logger = logging.getLogger(__name__)


def get_user_by_email(session: Session, email: str):
    return session.exec(select(User).where(User.email == email)).first()


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(data={"sub": str(user.id)}, settings=settings)


def register_user(session: Session, user_create: UserCreate, settings: Settings) -> Tuple[User, str]:
    # Check if user exists
    if get_user_by_email(session, user_create.email):
        raise InvalidInputError("Email already registered")

    db_user = User(
        email=user_create.email,
        password_hash=get_password_hash(user_create.password),
        full_name=user_create.full_name
    )

    session.add(db_user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration
        session.rollback()
        raise InvalidInputError("Email already registered")
    session.refresh(db_user)

    logger.info("Registered user %s", db_user.id)
    return db_user, issue_token(db_user, settings)


def authenticate_user(session: Session, credentials: UserLogin, settings: Settings) -> Tuple[User, str]:
    user = get_user_by_email(session, credentials.email)

    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning("Failed login attempt for %s", credentials.email)
        raise AuthenticationError("Incorrect email or password")

    return user, issue_token(user, settings)


def resolve_token(session: Session, token: str, settings: Settings) -> User:
    subject = decode_access_token(token, settings)
    try:
        user_id = uuid.UUID(subject)
    except ValueError:
        raise AuthenticationError("Could not validate credentials")

    user = session.get(User, user_id)
    if user is None:
        raise AuthenticationError("Could not validate credentials")
    return user


def update_profile(session: Session, user: User, user_update: UserUpdate) -> User:
    user_data = user_update.model_dump(exclude_unset=True)

    new_email = user_data.get("email")
    if new_email and new_email != user.email:
        if get_user_by_email(session, new_email):
            raise InvalidInputError("Email already registered")

    for key, value in user_data.items():
        setattr(user, key, value)

    user.updated_at = utcnow()
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise InvalidInputError("Email already registered")
    session.refresh(user)
    return user
