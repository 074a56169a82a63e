"""Tests for the dependency container."""

import httpx

from quantalox.config import Settings
from quantalox.container import Container
from quantalox.domain.entities import Account
from quantalox.network.httpx_client import HttpxClient
from quantalox.repositories.lstc import LsTcRepository
from quantalox.repositories.sqlite import SQLiteAccountRepository, SQLiteDatabase


class TestContainer:
    def test_creates_database_with_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "qx.db"

        with Container(Settings(sqlite_path=db_path)) as container:
            assert isinstance(container.database, SQLiteDatabase)
            assert isinstance(container.account_repository, SQLiteAccountRepository)

        assert db_path.exists()

    def test_caches_components(self, tmp_path):
        with Container(Settings(sqlite_path=tmp_path / "qx.db")) as container:
            assert container.database is container.database
            assert container.account_repository is container.account_repository
            assert (
                container.create_account_interactor
                is container.create_account_interactor
            )

    def test_data_persists_across_containers(self, tmp_path):
        settings = Settings(sqlite_path=tmp_path / "qx.db")
        with Container(settings) as container:
            container.account_repository.create_account(
                Account(id="a1", name="alice", created_at=1000)
            )

        with Container(settings) as container:
            assert container.account_repository.get_account("a1") is not None

    def test_http_client_uses_settings_timeouts(self, tmp_path):
        settings = Settings(
            sqlite_path=tmp_path / "qx.db",
            http_connect_timeout=4,
            http_read_timeout=8,
        )
        container = Container(settings)

        repo = container.network_data_repository

        assert isinstance(repo, LsTcRepository)
        assert container.http_client.connect_timeout == 4
        assert container.http_client.read_timeout == 8
        assert "User-Agent" in container.http_client.default_headers

    def test_import_service_wiring(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"series": {"history": {"data": [[1, 10.0], [2, 11.0]]}}}
            )

        container = Container(Settings(sqlite_path=tmp_path / "qx.db"))
        container.__dict__["http_client"] = HttpxClient(
            transport=httpx.MockTransport(handler)
        )

        try:
            written = container.time_series_import_service.import_instrument("43762")
            assert written == 2
            assert container.timeseries_repository.get_latest_point("43762").value == 11.0
        finally:
            container.close()

    def test_close_without_database_is_noop(self, tmp_path):
        db_path = tmp_path / "never.db"
        container = Container(Settings(sqlite_path=db_path))

        container.close()

        assert not db_path.exists()
