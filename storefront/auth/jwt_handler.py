from datetime import datetime, timedelta, timezone

import jwt

from storefront.core.config import Settings
from storefront.schemas import TokenResponse

TOKEN_TYPE = "Bearer"


def create_access_token(subject: str, settings: Settings, expires_seconds: int | None = None) -> str:
    expire_seconds = settings.jwt_expires_seconds if expires_seconds is None else expires_seconds
    issued_at = datetime.now(timezone.utc)
    payload = {"sub": subject, "exp": issued_at + timedelta(seconds=expire_seconds), "iat": issued_at}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )


def issue_token(user_id: str, settings: Settings) -> TokenResponse:
    """Sign a stateless token carrying only the user id; nothing is persisted."""
    return TokenResponse(
        access_token=create_access_token(user_id, settings),
        token_type=TOKEN_TYPE,
        expires_in=settings.jwt_expires_seconds,
    )
