from quantalox.services.accounts import (
    CreateAccountInteractor,
    CreateAccountRequest,
    CreateAccountResponse,
)
from quantalox.services.market_data import TimeSeriesImportService

__all__ = [
    "CreateAccountInteractor",
    "CreateAccountRequest",
    "CreateAccountResponse",
    "TimeSeriesImportService",
]
