from collections.abc import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.auth.policy import authorize
from storefront.core.config import Settings, get_settings
from storefront.core.errors import AuthenticationError
from storefront.database import get_db
from storefront.models.user import User
from storefront.services import auth

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    if credentials is None:
        raise AuthenticationError()
    return auth.verify_token(db, credentials.credentials, settings)


def require_roles(*roles: str) -> Callable[..., User]:
    """Build the authorization dependency for a route's explicit role list."""
    required = frozenset(roles)

    def check_roles(current_user: User = Depends(get_current_user)) -> User:
        authorize(required, current_user.role_names, current_user.id)
        return current_user

    return check_roles
