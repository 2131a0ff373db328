"""Sign-up, sign-in and bearer-token resolution."""

import logging

import jwt
from sqlalchemy.orm import Session

from storefront.auth import jwt_handler
from storefront.auth.passwords import verify_password
from storefront.core.config import Settings
from storefront.core.errors import AuthenticationError, NotFoundError
from storefront.models.user import User
from storefront.schemas import AuthResponse, UserCreate, UserResponse
from storefront.services import users

logger = logging.getLogger(__name__)


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    token = jwt_handler.issue_token(user.id, settings)
    return AuthResponse(**token.model_dump(), user=UserResponse.model_validate(user))


def sign_up(db: Session, details: UserCreate, settings: Settings) -> AuthResponse:
    user = users.create_user(db, details, settings)
    return _auth_response(user, settings)


def sign_in(db: Session, email: str, password: str, settings: Settings) -> AuthResponse:
    try:
        user = users.find_user(db, email, include_private=True)
    except NotFoundError:
        user = None

    if user is None or not verify_password(password, user.hashed_password) or not user.active:
        logger.warning("Rejected sign-in for %s", email)
        raise AuthenticationError()

    # UserResponse has no password field, so the hash never leaves this function.
    return _auth_response(user, settings)


def verify_token(db: Session, token: str, settings: Settings) -> User:
    """Validate a bearer token and re-resolve its user on every call.

    Deactivating or removing a user therefore invalidates their live tokens.
    """
    try:
        payload = jwt_handler.decode_access_token(token, settings)
    except jwt.PyJWTError as exc:
        logger.warning("Rejected token: %s", exc)
        raise AuthenticationError() from exc

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError()

    try:
        user = users.find_user(db, str(user_id))
    except NotFoundError as exc:
        logger.warning("Rejected token for missing user %s", user_id)
        raise AuthenticationError() from exc

    if not user.active:
        logger.warning("Rejected token for inactive user %s", user_id)
        raise AuthenticationError()
    return user


def profile(db: Session, user_id: str) -> User:
    return users.find_user(db, user_id)
