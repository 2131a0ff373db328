import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from threading import Lock

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from storefront.core.config import get_settings

logger = logging.getLogger(__name__)


def _connect_args(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


DATABASE_URL = get_settings().database_url

engine = create_engine(DATABASE_URL, connect_args=_connect_args(DATABASE_URL))

# Objects stay readable after the transaction that produced them has closed.
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


_roles_lock = Lock()
_roles_seeded = False


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> Callable[[], Session]:
    return SessionLocal


@contextmanager
def transaction_scope(session_factory: Callable[[], Session] = SessionLocal) -> Iterator[Session]:
    """Open a dedicated session, commit on success and roll back on any error.

    The session is closed on every exit path and is never shared between calls.
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def seed_roles(db: Session, names: Iterable[str]) -> list[str]:
    from storefront.models.user import Role

    existing = set(db.scalars(select(Role.name)).all())
    created = [name for name in dict.fromkeys(names) if name not in existing]
    for name in created:
        db.add(Role(name=name))
    db.flush()
    return created


def ensure_reference_roles() -> None:
    global _roles_seeded

    if _roles_seeded:
        return

    with _roles_lock:
        if _roles_seeded:
            return

        with transaction_scope() as db:
            created = seed_roles(db, get_settings().seed_roles)
        if created:
            logger.info("Seeded roles: %s", ", ".join(created))

        _roles_seeded = True
