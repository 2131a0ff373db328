import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    debug: bool = False
    database_url: str = "sqlite:///./storefront.db"
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_seconds: int = 3600
    default_role: str = "user"
    seed_roles: tuple[str, ...] = ("admin", "owner", "user")
    bcrypt_rounds: int = 10
    cors_origins: tuple[str, ...] = ("http://localhost:4200",)


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        app_env=os.getenv("APP_ENV", "development"),
        debug=_get_bool(os.getenv("APP_DEBUG"), default=False),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./storefront.db"),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "change-me"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expires_seconds=int(os.getenv("JWT_EXPIRES_SECONDS", "3600")),
        default_role=os.getenv("DEFAULT_ROLE", "user"),
        seed_roles=_get_list(os.getenv("SEED_ROLES"), ("admin", "owner", "user")),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
        cors_origins=_get_list(os.getenv("CORS_ORIGINS"), ("http://localhost:4200",)),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def validate_runtime_config(settings: Settings) -> None:
    if settings.app_env.lower() == "production" and settings.jwt_secret_key == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if settings.default_role not in settings.seed_roles:
        raise RuntimeError("DEFAULT_ROLE must be one of SEED_ROLES.")
