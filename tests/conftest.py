"""
Pytest configuration and shared fixtures for the runway planner tests.
"""

import os
from datetime import date

import pytest

from app import create_app
from app.config import Settings, reset_global_settings
from app.storage import LocalStorageService

# Settings require a secret key; provide one before anything reads the env
os.environ.setdefault("SECRET_KEY", "test-secret-key-123")


@pytest.fixture
def start_date():
    """A fixed, non-leap February start so month-end clamping is visible."""
    return date(2025, 2, 1)


@pytest.fixture
def storage(tmp_path):
    """Local storage rooted in a temporary directory."""
    return LocalStorageService(base_path=str(tmp_path / "storage"), create_dirs=True)


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing storage at a temporary directory."""
    return Settings(
        _env_file=None,
        SECRET_KEY="test-secret-key-123",
        APP_ENV="testing",
        STORAGE_BASE_PATH=str(tmp_path / "app-storage"),
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def app(test_settings):
    """Flask application backed by temporary storage."""
    reset_global_settings()
    app = create_app(test_settings)
    yield app
    reset_global_settings()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
