"""Tests for SQLiteTimeSeriesRepository."""

import pytest

from quantalox.domain.entities import Asset, TimeSeriesPoint, Unit, UnitConversion
from quantalox.exceptions import IntegrityError
from quantalox.repositories.sqlite import SQLiteTimeSeriesRepository


@pytest.fixture
def repo(timeseries_repo: SQLiteTimeSeriesRepository) -> SQLiteTimeSeriesRepository:
    timeseries_repo.create_asset(Asset(id="43762", name="DAX", source="ls-tc.de"))
    return timeseries_repo


def point(ts: int, value: float, unit_id: str = "") -> TimeSeriesPoint:
    return TimeSeriesPoint(asset_id="43762", timestamp_ms=ts, value=value, unit_id=unit_id)


class TestAssets:
    def test_create_and_get_asset(self, repo: SQLiteTimeSeriesRepository):
        asset = repo.get_asset("43762")

        assert asset == Asset(id="43762", name="DAX", description="", source="ls-tc.de")
        assert repo.get_asset("missing") is None

    def test_update_and_list_assets(self, repo: SQLiteTimeSeriesRepository):
        repo.create_asset(Asset(id="1", name="Apple"))
        repo.update_asset(Asset(id="43762", name="DAX 40", description="index"))

        assets = repo.get_all_assets()

        assert [a.name for a in assets] == ["Apple", "DAX 40"]
        assert assets[1].description == "index"

    def test_delete_asset_removes_points(self, repo: SQLiteTimeSeriesRepository):
        repo.add_point(point(1000, 1.0))

        assert repo.delete_asset("43762") is True
        assert repo.delete_asset("43762") is False
        assert repo.get_latest_point("43762") is None


class TestUnits:
    @pytest.fixture(autouse=True)
    def _units(self, repo: SQLiteTimeSeriesRepository):
        repo.create_unit(Unit(id="EUR", symbol="€", name="Euro"))
        repo.create_unit(Unit(id="CENT", symbol="ct", name="Euro cent"))

    def test_units(self, repo: SQLiteTimeSeriesRepository):
        assert repo.get_unit("EUR") == Unit(id="EUR", symbol="€", name="Euro")
        assert [u.id for u in repo.get_all_units()] == ["EUR", "CENT"]
        assert repo.delete_unit("CENT") is True
        assert repo.get_unit("CENT") is None

    def test_conversion_requires_known_units(self, repo: SQLiteTimeSeriesRepository):
        with pytest.raises(IntegrityError):
            repo.create_conversion(UnitConversion("EUR", "USD", 1.1))

    def test_convert(self, repo: SQLiteTimeSeriesRepository):
        repo.create_conversion(UnitConversion("EUR", "CENT", 100.0))

        assert repo.get_conversions_from("EUR") == [UnitConversion("EUR", "CENT", 100.0)]
        assert repo.convert(2.5, "EUR", "CENT") == pytest.approx(250.0)
        assert repo.convert(250.0, "CENT", "EUR") == pytest.approx(2.5)
        assert repo.convert(7.0, "EUR", "EUR") == 7.0
        assert repo.convert(1.0, "EUR", "USD") is None

    def test_update_unit(self, repo: SQLiteTimeSeriesRepository):
        assert repo.update_unit(Unit(id="EUR", symbol="EUR", name="Euro (ISO)")) is True
        assert repo.update_unit(Unit(id="USD", symbol="$", name="Dollar")) is False

        assert repo.get_unit("EUR") == Unit(id="EUR", symbol="EUR", name="Euro (ISO)")
        assert repo.get_unit("USD") is None

    def test_get_all_conversions(self, repo: SQLiteTimeSeriesRepository):
        repo.create_conversion(UnitConversion("EUR", "CENT", 100.0))
        repo.create_conversion(UnitConversion("CENT", "EUR", 0.01))

        assert repo.get_all_conversions() == [
            UnitConversion("CENT", "EUR", 0.01),
            UnitConversion("EUR", "CENT", 100.0),
        ]

    def test_update_conversion(self, repo: SQLiteTimeSeriesRepository):
        repo.create_conversion(UnitConversion("EUR", "CENT", 10.0))

        assert repo.update_conversion(UnitConversion("EUR", "CENT", 100.0)) is True
        assert repo.update_conversion(UnitConversion("CENT", "EUR", 0.01)) is False

        assert repo.convert(1.5, "EUR", "CENT") == pytest.approx(150.0)
        assert repo.get_conversion("CENT", "EUR") is None

    def test_delete_conversion(self, repo: SQLiteTimeSeriesRepository):
        repo.create_conversion(UnitConversion("EUR", "CENT", 100.0))

        assert repo.delete_conversion("EUR", "CENT") is True
        assert repo.get_conversion("EUR", "CENT") is None


class TestPoints:
    def test_add_points_and_query_range(self, repo: SQLiteTimeSeriesRepository):
        written = repo.add_points([point(3000, 3.0), point(1000, 1.0), point(2000, 2.0)])

        assert written == 3
        result = repo.get_points("43762", 1000, 2000)
        assert [p.timestamp_ms for p in result] == [1000, 2000]
        assert result[0].value == 1.0

    def test_add_points_empty(self, repo: SQLiteTimeSeriesRepository):
        assert repo.add_points([]) == 0

    def test_failed_batch_stores_nothing(self, repo: SQLiteTimeSeriesRepository):
        orphan = TimeSeriesPoint(asset_id="ghost", timestamp_ms=2000, value=2.0)

        with pytest.raises(IntegrityError):
            repo.add_points([point(1000, 1.0), orphan])

        assert repo.get_points("43762", 0, 10_000) == []

    def test_add_point_upserts(self, repo: SQLiteTimeSeriesRepository):
        repo.add_point(point(1000, 1.0))
        repo.add_point(point(1000, 1.5))

        result = repo.get_points("43762", 0, 10_000)
        assert len(result) == 1
        assert result[0].value == 1.5

    def test_point_for_unknown_asset_raises(self, timeseries_repo: SQLiteTimeSeriesRepository):
        with pytest.raises(IntegrityError):
            timeseries_repo.add_point(
                TimeSeriesPoint(asset_id="ghost", timestamp_ms=1, value=1.0)
            )

    def test_filter_by_unit(self, repo: SQLiteTimeSeriesRepository):
        repo.add_points([point(1000, 1.0, "EUR"), point(1000, 1.1, "USD")])

        eur = repo.get_points("43762", 0, 2000, unit_id="EUR")

        assert [p.unit_id for p in eur] == ["EUR"]
        assert len(repo.get_points("43762", 0, 2000)) == 2

    def test_get_latest_point(self, repo: SQLiteTimeSeriesRepository):
        repo.add_points([point(1000, 1.0), point(5000, 5.0, "USD"), point(3000, 3.0)])

        latest = repo.get_latest_point("43762")
        assert latest is not None
        assert latest.timestamp_ms == 5000

        latest_plain = repo.get_latest_point("43762", unit_id="")
        assert latest_plain is not None
        assert latest_plain.timestamp_ms == 3000

    def test_delete_points(self, repo: SQLiteTimeSeriesRepository):
        repo.add_points([point(1000, 1.0), point(2000, 2.0), point(3000, 3.0)])

        assert repo.delete_points("43762", 1000, 2000) == 2
        assert repo.delete_all_points("43762") == 1
        assert repo.get_points("43762", 0, 10_000) == []
