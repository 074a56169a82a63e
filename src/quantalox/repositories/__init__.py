from quantalox.repositories.database import Database
from quantalox.repositories.interfaces import (
    AccountRepository,
    NetworkDataRepository,
    SettingRepository,
    TimeSeriesRepository,
    UserRepository,
)
from quantalox.repositories.lstc import LsTcRepository
from quantalox.repositories.sqlite import (
    SQLiteAccountRepository,
    SQLiteDatabase,
    SQLiteSettingRepository,
    SQLiteTimeSeriesRepository,
    SQLiteUserRepository,
)

__all__ = [
    "AccountRepository",
    "Database",
    "LsTcRepository",
    "NetworkDataRepository",
    "SQLiteAccountRepository",
    "SQLiteDatabase",
    "SQLiteSettingRepository",
    "SQLiteTimeSeriesRepository",
    "SQLiteUserRepository",
    "SettingRepository",
    "TimeSeriesRepository",
    "UserRepository",
]
