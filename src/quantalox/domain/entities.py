from dataclasses import dataclass
from datetime import UTC, datetime


def _utc_now() -> datetime:
    return datetime.now(UTC)


def epoch_ms_now() -> int:
    return int(_utc_now().timestamp() * 1000)


@dataclass
class Account:
    id: str
    name: str
    created_at: int  # epoch milliseconds
    password_hash: bytes | None = None


@dataclass
class AccountProperty:
    account_id: str
    key: str
    value: str
    description: str | None = None


@dataclass
class User:
    id: str
    email: str
    name: str
    created_at: datetime


@dataclass
class TimeSeriesPoint:
    asset_id: str
    timestamp_ms: int
    value: float
    unit_id: str = ""


@dataclass
class Setting:
    key: str
    value: str
    description: str | None = None


@dataclass
class Asset:
    id: str
    name: str
    description: str = ""
    source: str = ""


@dataclass
class Unit:
    id: str  # e.g. "EUR", "degC"
    symbol: str
    name: str


@dataclass
class UnitConversion:
    """Linear conversion: to = from * factor."""

    from_unit_id: str
    to_unit_id: str
    factor: float
