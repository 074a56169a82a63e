"""Imports remote time series into the local store."""

from quantalox.domain.entities import Asset
from quantalox.logging_config import LogContext, get_logger
from quantalox.repositories.interfaces import (
    NetworkDataRepository,
    TimeSeriesRepository,
)

logger = get_logger(__name__)


class TimeSeriesImportService:
    def __init__(
        self,
        network_repo: NetworkDataRepository,
        timeseries_repo: TimeSeriesRepository,
        source: str = "ls-tc.de",
    ) -> None:
        self._network_repo = network_repo
        self._timeseries_repo = timeseries_repo
        self._source = source

    def import_instrument(self, instrument_id: str, name: str | None = None) -> int:
        """Fetch an instrument's series and upsert it into the store.

        The asset is created on first import. Network errors propagate.

        Returns:
            Number of points written
        """
        with LogContext(instrument_id=instrument_id):
            points = self._network_repo.fetch_time_series_data(instrument_id)

            if self._timeseries_repo.get_asset(instrument_id) is None:
                self._timeseries_repo.create_asset(
                    Asset(id=instrument_id, name=name or instrument_id, source=self._source)
                )
                logger.info("asset_created")

            written = self._timeseries_repo.add_points(points)
            logger.info("time_series_imported", fetched=len(points), written=written)
            return written
