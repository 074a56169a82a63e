from collections.abc import Iterator

import pytest

from quantalox.config import get_settings
from quantalox.domain.entities import Account
from quantalox.repositories.sqlite import (
    SQLiteAccountRepository,
    SQLiteDatabase,
    SQLiteSettingRepository,
    SQLiteTimeSeriesRepository,
    SQLiteUserRepository,
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path) -> Iterator[None]:
    """Keep tests away from the user's home directory and .env file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("QX_SQLITE_PATH", str(tmp_path / "default.db"))
    monkeypatch.setenv("QX_ENVIRONMENT", "testing")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db() -> Iterator[SQLiteDatabase]:
    """Create an in-memory SQLite database for testing."""
    database = SQLiteDatabase(":memory:")
    database.initialize()
    yield database
    database.close()


@pytest.fixture
def account_repo(db: SQLiteDatabase) -> SQLiteAccountRepository:
    return SQLiteAccountRepository(db)


@pytest.fixture
def user_repo(db: SQLiteDatabase) -> SQLiteUserRepository:
    return SQLiteUserRepository(db)


@pytest.fixture
def setting_repo(db: SQLiteDatabase) -> SQLiteSettingRepository:
    return SQLiteSettingRepository(db)


@pytest.fixture
def timeseries_repo(db: SQLiteDatabase) -> SQLiteTimeSeriesRepository:
    return SQLiteTimeSeriesRepository(db)


@pytest.fixture
def alice() -> Account:
    return Account(id="a1", name="alice", created_at=1000)
