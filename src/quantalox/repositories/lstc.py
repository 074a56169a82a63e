"""Time series gateway for the ls-tc.de (Lang & Schwarz) chart endpoint."""

import json
from typing import Any

from quantalox.config import DEFAULT_LSTC_URL
from quantalox.domain.entities import TimeSeriesPoint
from quantalox.exceptions import NetworkError
from quantalox.logging_config import get_logger
from quantalox.network.interfaces import HttpClient, QueryParams
from quantalox.repositories.interfaces import NetworkDataRepository

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


class LsTcRepository(NetworkDataRepository):
    """Fetches intraday chart data for an instrument.

    Points are returned sorted by timestamp.
    """

    MARKET_ID = "1"
    QUOTE_TYPE = "last"
    SERIES = "intraday"
    LOCALE_ID = "2"

    def __init__(
        self,
        client: HttpClient,
        base_url: str = DEFAULT_LSTC_URL,
        connect_timeout: int = 10,
        read_timeout: int = 30,
    ) -> None:
        self._client = client
        self._base_url = base_url
        self._client.set_default_headers(DEFAULT_HEADERS)
        self._client.set_connect_timeout(connect_timeout)
        self._client.set_read_timeout(read_timeout)

    def fetch_time_series_data(self, instrument_id: str) -> list[TimeSeriesPoint]:
        """Fetch the intraday series for an instrument.

        Raises:
            NetworkError: On transport failures (propagated unchanged) or when
                the response body cannot be parsed
        """
        params = self._build_query_params(instrument_id)
        response = self._client.get(self._base_url, params)

        try:
            points = self._parse_response(instrument_id, response.body)
        except (ValueError, KeyError, TypeError, IndexError) as e:
            raise NetworkError(
                f"Failed to fetch data for instrument: {instrument_id} - {e}",
                context={"instrument_id": instrument_id},
            ) from e

        logger.info(
            "time_series_fetched", instrument_id=instrument_id, points=len(points)
        )
        return points

    def _build_query_params(self, instrument_id: str) -> QueryParams:
        return {
            "instrumentId": instrument_id,
            "marketId": self.MARKET_ID,
            "quotetype": self.QUOTE_TYPE,
            "series": self.SERIES,
            "localeId": self.LOCALE_ID,
        }

    def _parse_response(
        self, instrument_id: str, body: str
    ) -> list[TimeSeriesPoint]:
        payload: Any = json.loads(body)
        data = payload["series"]["history"]["data"]

        points: list[TimeSeriesPoint] = []
        for entry in data:
            # Each entry is [epoch_seconds, price]
            if len(entry) < 2:
                continue
            points.append(
                TimeSeriesPoint(
                    asset_id=instrument_id,
                    timestamp_ms=int(entry[0]) * 1000,
                    value=float(entry[1]),
                    unit_id="",  # not provided by this API
                )
            )

        points.sort(key=lambda p: p.timestamp_ms)
        return points
