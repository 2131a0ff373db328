"""Credential store: persisted users, their password hashes and role assignments."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, defer, selectinload

from storefront.auth.passwords import hash_password
from storefront.core.config import Settings
from storefront.core.errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from storefront.core.identifiers import parse_uuid
from storefront.models.role import Role
from storefront.models.user import User
from storefront.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

PRIVATE_COLUMNS = (User.hashed_password, User.created_at, User.updated_at)


def build_user(details: UserCreate, roles: list[Role], settings: Settings) -> User:
    return User(
        email=details.email,
        hashed_password=hash_password(details.password, rounds=settings.bcrypt_rounds),
        first_name=details.first_name,
        last_name=details.last_name,
        phone=details.phone,
        active=True,
        roles=roles,
    )


def create_user(db: Session, details: UserCreate, settings: Settings) -> User:
    try:
        default_role = db.scalars(select(Role).where(Role.name == settings.default_role)).first()
    except SQLAlchemyError as exc:
        logger.exception("Error loading default role %s", settings.default_role)
        raise PersistenceError(f"Error creating user: {details.email}") from exc

    if default_role is None:
        raise ValidationError(f"Default role '{settings.default_role}' is not configured.")

    user = build_user(details, [default_role], settings)
    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rejected duplicate user %s: %s", details.email, exc.orig)
        raise ConflictError(f"User with email {details.email} already exists.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating user %s", details.email)
        raise PersistenceError(f"Error creating user: {details.email}") from exc

    logger.info("Created user %s", user.id)
    return user


def list_users(db: Session, limit: int = 0, offset: int = 0) -> list[User]:
    query = (
        select(User)
        .options(*(defer(column, raiseload=True) for column in PRIVATE_COLUMNS))
        .where(User.active.is_(True))
        .order_by(User.created_at, User.id)
        .offset(offset)
    )
    if limit:
        query = query.limit(limit)
    try:
        return list(db.scalars(query).all())
    except SQLAlchemyError as exc:
        logger.exception("Error finding user collection")
        raise PersistenceError("Cannot find users") from exc


def find_user(db: Session, id_or_email: str, include_private: bool = False) -> User:
    """Resolve a user by id when the input is UUID-shaped, otherwise by email.

    Without ``include_private`` the password hash and timestamps are never
    loaded; touching them raises instead of issuing a query.
    """
    user_id = parse_uuid(id_or_email)
    condition = User.id == user_id if user_id else User.email == id_or_email
    query = select(User).options(selectinload(User.roles)).where(condition)
    if not include_private:
        query = query.options(*(defer(column, raiseload=True) for column in PRIVATE_COLUMNS))
    else:
        # A previous public lookup in the same session may have left these unloaded.
        query = query.execution_options(populate_existing=True)

    try:
        user = db.scalars(query).first()
    except SQLAlchemyError as exc:
        logger.exception("Error finding user with %s", id_or_email)
        raise PersistenceError(f"Error searching user: {id_or_email}") from exc

    if user is None:
        raise NotFoundError(f"User {id_or_email} not found")
    return user


def update_user(db: Session, user_id: str, details: UserUpdate, settings: Settings) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User with id: {user_id} not found")

    changes = details.model_dump(exclude_unset=True)
    raw_password = changes.pop("password", None)
    for field, value in changes.items():
        setattr(user, field, value)
    if raw_password is not None:
        user.hashed_password = hash_password(raw_password, rounds=settings.bcrypt_rounds)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rejected user update %s: %s", user_id, exc.orig)
        raise ConflictError(f"Error updating user with id: {user_id}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error updating user %s", user_id)
        raise PersistenceError(f"Error updating user with id: {user_id}") from exc

    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user


def remove_user(db: Session, user_id: str) -> None:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User with id: {user_id} not found")
    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting user %s", user_id)
        raise PersistenceError(f"Error deleting user with id: {user_id}") from exc
    logger.info("Removed user %s", user_id)
