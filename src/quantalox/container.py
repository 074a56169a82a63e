"""Dependency injection container for Quantalox.

The container owns the shared SQLiteDatabase; every repository it hands out
holds a non-owning reference to it. Close the container only after the
repositories are no longer used.

Usage:
    with Container(settings) as container:
        interactor = container.create_account_interactor
        interactor.execute(request)
"""

from functools import cached_property
from typing import TYPE_CHECKING

from quantalox.config import Settings, get_settings
from quantalox.logging_config import get_logger

if TYPE_CHECKING:
    from quantalox.network.httpx_client import HttpxClient
    from quantalox.repositories.lstc import LsTcRepository
    from quantalox.repositories.sqlite import (
        SQLiteAccountRepository,
        SQLiteDatabase,
        SQLiteSettingRepository,
        SQLiteTimeSeriesRepository,
        SQLiteUserRepository,
    )
    from quantalox.services.accounts import CreateAccountInteractor
    from quantalox.services.market_data import TimeSeriesImportService

logger = get_logger(__name__)


class Container:
    """Lazily builds and caches the application's repositories and services.

    For tests, pass settings pointing at a temporary database:

        container = Container(settings=Settings(sqlite_path=tmp_path / "qx.db"))
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            sqlite_path=str(self._settings.sqlite_path),
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @cached_property
    def database(self) -> "SQLiteDatabase":
        """The shared database, initialized on first access."""
        from quantalox.repositories.sqlite import SQLiteDatabase

        db_path = self._settings.sqlite_path
        if str(db_path) != ":memory:":
            db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("initializing_sqlite_database", path=str(db_path))

        db = SQLiteDatabase(db_path)
        db.initialize()
        return db

    @cached_property
    def account_repository(self) -> "SQLiteAccountRepository":
        from quantalox.repositories.sqlite import SQLiteAccountRepository

        return SQLiteAccountRepository(self.database)

    @cached_property
    def user_repository(self) -> "SQLiteUserRepository":
        from quantalox.repositories.sqlite import SQLiteUserRepository

        return SQLiteUserRepository(self.database)

    @cached_property
    def setting_repository(self) -> "SQLiteSettingRepository":
        from quantalox.repositories.sqlite import SQLiteSettingRepository

        return SQLiteSettingRepository(self.database)

    @cached_property
    def timeseries_repository(self) -> "SQLiteTimeSeriesRepository":
        from quantalox.repositories.sqlite import SQLiteTimeSeriesRepository

        return SQLiteTimeSeriesRepository(self.database)

    @cached_property
    def http_client(self) -> "HttpxClient":
        from quantalox.network.httpx_client import HttpxClient

        return HttpxClient(
            connect_timeout=self._settings.http_connect_timeout,
            read_timeout=self._settings.http_read_timeout,
        )

    @cached_property
    def network_data_repository(self) -> "LsTcRepository":
        from quantalox.repositories.lstc import LsTcRepository

        return LsTcRepository(
            self.http_client,
            base_url=self._settings.lstc_base_url,
            connect_timeout=self._settings.http_connect_timeout,
            read_timeout=self._settings.http_read_timeout,
        )

    @cached_property
    def create_account_interactor(self) -> "CreateAccountInteractor":
        from quantalox.services.accounts import CreateAccountInteractor

        return CreateAccountInteractor(self.account_repository)

    @cached_property
    def time_series_import_service(self) -> "TimeSeriesImportService":
        from quantalox.services.market_data import TimeSeriesImportService

        return TimeSeriesImportService(
            self.network_data_repository, self.timeseries_repository
        )

    def close(self) -> None:
        """Close the database if it was opened."""
        if "database" in self.__dict__:
            logger.info("closing_database_connection")
            self.database.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
