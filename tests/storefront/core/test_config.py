import pytest

from storefront.core.config import Settings, load_settings, validate_runtime_config


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('JWT_SECRET_KEY', 'from-env')
    monkeypatch.setenv('JWT_EXPIRES_SECONDS', '120')
    monkeypatch.setenv('SEED_ROLES', 'admin, user ,')
    monkeypatch.setenv('DEFAULT_ROLE', 'user')
    monkeypatch.setenv('APP_DEBUG', 'yes')

    settings = load_settings()

    assert settings.jwt_secret_key == 'from-env'
    assert settings.jwt_expires_seconds == 120
    assert settings.seed_roles == ('admin', 'user')
    assert settings.debug is True


def test_validate_runtime_config_rejects_placeholder_secret_in_production() -> None:
    with pytest.raises(RuntimeError):
        validate_runtime_config(Settings(app_env='production'))


def test_validate_runtime_config_requires_seeded_default_role() -> None:
    with pytest.raises(RuntimeError):
        validate_runtime_config(Settings(default_role='guest'))


def test_validate_runtime_config_accepts_defaults() -> None:
    validate_runtime_config(Settings())
