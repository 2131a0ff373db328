import jwt
import pytest
from sqlalchemy.orm import Session

from storefront.auth import jwt_handler
from storefront.auth.passwords import hash_password, verify_password
from storefront.core.config import Settings
from storefront.core.errors import AuthenticationError
from storefront.schemas import UserCreate, UserUpdate
from storefront.services import auth, users

TEST_JWT_SECRET = 'test-secret-key-for-testing-only'
TEST_PASSWORD = 'Secret123'


def test_hash_password_is_salted() -> None:
    first = hash_password('Secret123', rounds=4)
    second = hash_password('Secret123', rounds=4)

    assert first != second
    assert verify_password('Secret123', first)
    assert verify_password('Secret123', second)


def test_verify_password_rejects_malformed_hash() -> None:
    assert verify_password('Secret123', 'not-a-bcrypt-hash') is False
    assert verify_password('Secret123', None) is False


def test_issue_token_carries_only_the_user_id(settings: Settings) -> None:
    token = jwt_handler.issue_token('user-123', settings)

    payload = jwt.decode(token.access_token, TEST_JWT_SECRET, algorithms=['HS256'])
    assert token.token_type == 'Bearer'
    assert token.expires_in == 3600
    assert payload['sub'] == 'user-123'
    assert set(payload) == {'sub', 'exp', 'iat'}
    assert payload['exp'] - payload['iat'] == 3600


def test_verify_token_resolves_user(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')
    token = jwt_handler.issue_token(user.id, settings)

    assert auth.verify_token(db, token.access_token, settings).id == user.id


def test_verify_token_rejects_wrong_signature(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')
    forged = jwt_handler.create_access_token(user.id, Settings(jwt_secret_key='another-secret'))

    with pytest.raises(AuthenticationError):
        auth.verify_token(db, forged, settings)


def test_verify_token_rejects_expired_token(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')
    expired = jwt_handler.create_access_token(user.id, settings, expires_seconds=-60)

    with pytest.raises(AuthenticationError):
        auth.verify_token(db, expired, settings)


def test_verify_token_rejects_deactivated_user(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')
    token = jwt_handler.issue_token(user.id, settings)

    users.update_user(db, user.id, UserUpdate(active=False), settings)

    with pytest.raises(AuthenticationError):
        auth.verify_token(db, token.access_token, settings)


def test_verify_token_rejects_removed_user(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')
    token = jwt_handler.issue_token(user.id, settings)

    users.remove_user(db, user.id)

    with pytest.raises(AuthenticationError):
        auth.verify_token(db, token.access_token, settings)


def test_sign_up_returns_token_and_user(db: Session, settings: Settings) -> None:
    response = auth.sign_up(
        db,
        UserCreate(email='new@example.com', password=TEST_PASSWORD, first_name='New'),
        settings,
    )

    assert response.token_type == 'Bearer'
    assert response.user.email == 'new@example.com'
    assert response.user.roles == ['user']
    assert 'password' not in response.model_dump(by_alias=True)['user']
    assert 'hashedPassword' not in response.model_dump(by_alias=True)['user']


def test_sign_in_returns_token_without_password(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')

    response = auth.sign_in(db, 'buyer@example.com', TEST_PASSWORD, settings)

    assert response.user.id == user.id
    assert auth.verify_token(db, response.access_token, settings).id == user.id
    assert set(response.model_dump(by_alias=True)['user']) == {
        'id', 'email', 'firstName', 'lastName', 'phone', 'active', 'roles',
    }


def test_sign_in_failures_are_indistinguishable(db: Session, settings: Settings, make_user) -> None:
    make_user('a@b.com')

    with pytest.raises(AuthenticationError) as wrong_password:
        auth.sign_in(db, 'a@b.com', 'wrong', settings)
    with pytest.raises(AuthenticationError) as unknown_email:
        auth.sign_in(db, 'nonexistent@b.com', 'x', settings)

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.to_dict() == unknown_email.value.to_dict()


def test_sign_in_rejects_inactive_account(db: Session, settings: Settings, make_user) -> None:
    user = make_user('buyer@example.com')
    users.update_user(db, user.id, UserUpdate(active=False), settings)

    with pytest.raises(AuthenticationError):
        auth.sign_in(db, 'buyer@example.com', TEST_PASSWORD, settings)


def test_create_access_token_honours_zero_lifetime(settings: Settings) -> None:
    token = jwt_handler.create_access_token('user-1', settings, expires_seconds=0)

    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={'verify_exp': False},
    )

    assert payload['exp'] == payload['iat']
