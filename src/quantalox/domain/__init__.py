from quantalox.domain.entities import (
    Account,
    AccountProperty,
    Asset,
    Setting,
    TimeSeriesPoint,
    Unit,
    UnitConversion,
    User,
)

__all__ = [
    "Account",
    "AccountProperty",
    "Asset",
    "Setting",
    "TimeSeriesPoint",
    "Unit",
    "UnitConversion",
    "User",
]
