import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from storefront.core.config import Settings
from storefront.database import Base, seed_roles
from storefront.models.product import Product, ProductImage  # noqa: F401
from storefront.models.user import Role, User
from storefront.schemas import UserCreate
from storefront.services import users

TEST_JWT_SECRET = 'test-secret-key-for-testing-only'
TEST_PASSWORD = 'Secret123'


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret_key=TEST_JWT_SECRET, bcrypt_rounds=4)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f'sqlite:///{tmp_path / "storefront-test.db"}',
        connect_args={'check_same_thread': False},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine, settings):
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    db = factory()
    try:
        seed_roles(db, settings.seed_roles)
        db.commit()
    finally:
        db.close()
    return factory


@pytest.fixture
def db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(db, settings):
    def _make_user(email: str, roles: tuple[str, ...] = ('user',), password: str = TEST_PASSWORD) -> User:
        user = users.create_user(db, UserCreate(email=email, password=password, first_name='Test'), settings)
        user.roles = list(db.scalars(select(Role).where(Role.name.in_(roles))).all())
        db.commit()
        return user

    return _make_user
