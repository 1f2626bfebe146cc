# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - clean_config (autouse)   → fresh AppConfig, no USER_STORE_* env
# - sample_file_content      → the one-record store used in examples
# - store_file(tmp_path)     → a store file holding that content
# - memory_repository        → InMemoryRepository holding that content
# - config                   → default AppConfig
# ==============================================

import pytest

from user_store.config import AppConfig, reset_config
from user_store.persistence.repository import InMemoryRepository


SAMPLE = b'[{"id":"1","email":"a@x.com","age":30}]'


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts without cached config or USER_STORE_* variables."""
    for name in (
        "USER_STORE_FILE_MODE",
        "USER_STORE_ENCODING",
        "USER_STORE_STRICT_ITEMS",
        "USER_STORE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_file_content() -> bytes:
    return SAMPLE


@pytest.fixture
def store_file(tmp_path, sample_file_content):
    """A store file on disk with a single record."""
    path = tmp_path / "users.json"
    path.write_bytes(sample_file_content)
    return path


@pytest.fixture
def memory_repository(sample_file_content):
    return InMemoryRepository(sample_file_content)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()
