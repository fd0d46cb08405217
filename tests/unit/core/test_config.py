import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from resumebuilder.core.config import DEFAULT_SECRET_KEY, Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    with patch.dict(os.environ, {"RESUMEBUILDER_ENVIRONMENT": "development"}):
        settings = Settings()

    assert settings.app_name == "ResumeBuilder"
    assert settings.port == 8080
    assert settings.api_prefix == "/api"
    assert settings.access_token_expire_minutes == 60 * 24 * 7
    assert settings.verification_token_expire_hours == 24
    assert settings.email_provider == "console"
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "RESUMEBUILDER_APP_NAME": "TestApp",
        "RESUMEBUILDER_PORT": "9000",
        "RESUMEBUILDER_ACCESS_TOKEN_EXPIRE_MINUTES": "15",
    }):
        settings = Settings()

    assert settings.app_name == "TestApp"
    assert settings.port == 9000
    assert settings.access_token_expire_minutes == 15


def test_settings_are_immutable():
    settings = Settings()

    with pytest.raises(ValidationError):
        settings.port = 1234


def test_cors_origins_parsing():
    """Test CORS origins parsing from a JSON list and a comma-separated string."""
    with patch.dict(os.environ, {
        "RESUMEBUILDER_CORS_ORIGINS": '["http://example.com", "http://test.com"]'
    }):
        assert Settings().cors_origins == ["http://example.com", "http://test.com"]

    settings = Settings(cors_origins="http://a.com, http://b.com")
    assert settings.cors_origins == ["http://a.com", "http://b.com"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("/api", "/api"), ("api/", "/api"), ("/api/v1/", "/api/v1"), ("/", "")],
)
def test_api_prefix_normalized(raw, expected):
    assert Settings(api_prefix=raw).api_prefix == expected


def test_verification_url_base():
    settings = Settings(app_base_url="https://resumes.example.com/", api_prefix="/api")

    assert settings.verification_url_base == "https://resumes.example.com/api/auth/verify-email"


def test_production_requires_secret_key():
    with pytest.raises(ValidationError, match="SECRET_KEY"):
        Settings(environment="production", secret_key=DEFAULT_SECRET_KEY)

    settings = Settings(environment="production", secret_key="a-real-secret")
    assert settings.is_production is True


def test_smtp_requires_host():
    with pytest.raises(ValidationError, match="SMTP_HOST"):
        Settings(email_provider="smtp")


def test_non_positive_timeouts_rejected():
    with pytest.raises(ValidationError):
        Settings(store_timeout_seconds=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()
