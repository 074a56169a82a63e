from abc import ABC, abstractmethod

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


class AccountRepository(ABC):
    """Account and account-property storage consumed by the use cases.

    Lookups return None (or an empty list) when nothing matches.
    """

    @abstractmethod
    def create_account(self, account: Account) -> None:
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Account | None:
        pass

    @abstractmethod
    def get_account_by_name(self, name: str) -> Account | None:
        pass

    @abstractmethod
    def get_all_accounts(self) -> list[Account]:
        pass

    @abstractmethod
    def update_account(self, account: Account) -> None:
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> bool:
        pass

    @abstractmethod
    def account_exists(self, account_id: str) -> bool:
        pass

    @abstractmethod
    def account_exists_by_name(self, name: str) -> bool:
        pass

    @abstractmethod
    def set_property(
        self,
        account_id: str,
        key: str,
        value: str,
        description: str | None = None,
    ) -> None:
        pass

    @abstractmethod
    def set_property_entry(self, prop: AccountProperty) -> None:
        pass

    @abstractmethod
    def get_property(self, account_id: str, key: str) -> AccountProperty | None:
        pass

    @abstractmethod
    def get_property_value(self, account_id: str, key: str) -> str | None:
        pass

    @abstractmethod
    def get_properties(self, account_id: str) -> list[AccountProperty]:
        pass

    @abstractmethod
    def get_properties_by_prefix(
        self, account_id: str, prefix: str
    ) -> list[AccountProperty]:
        pass

    @abstractmethod
    def property_exists(self, account_id: str, key: str) -> bool:
        pass

    @abstractmethod
    def remove_property(self, account_id: str, key: str) -> None:
        pass

    @abstractmethod
    def remove_properties_by_prefix(self, account_id: str, prefix: str) -> None:
        pass

    @abstractmethod
    def clear_properties(self, account_id: str) -> None:
        pass

    @abstractmethod
    def count_accounts(self) -> int:
        pass

    @abstractmethod
    def count_properties(self, account_id: str) -> int:
        pass


class UserRepository(ABC):
    @abstractmethod
    def find_by_id(self, user_id: str) -> User | None:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> User | None:
        pass

    @abstractmethod
    def find_all(self) -> list[User]:
        pass

    @abstractmethod
    def save(self, user: User) -> User:
        pass

    @abstractmethod
    def remove(self, user_id: str) -> bool:
        pass


class SettingRepository(ABC):
    @abstractmethod
    def set(self, key: str, value: str, description: str | None = None) -> None:
        pass

    @abstractmethod
    def set_entry(self, setting: Setting) -> None:
        pass

    @abstractmethod
    def get(self, key: str) -> Setting | None:
        pass

    @abstractmethod
    def get_value(self, key: str) -> str | None:
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    @abstractmethod
    def get_all(self) -> list[Setting]:
        pass

    @abstractmethod
    def get_by_prefix(self, prefix: str) -> list[Setting]:
        pass

    @abstractmethod
    def get_keys(self) -> list[str]:
        pass

    @abstractmethod
    def get_keys_by_prefix(self, prefix: str) -> list[str]:
        pass

    @abstractmethod
    def remove_by_prefix(self, prefix: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def count_by_prefix(self, prefix: str) -> int:
        pass


class TimeSeriesRepository(ABC):
    @abstractmethod
    def create_asset(self, asset: Asset) -> None:
        pass

    @abstractmethod
    def get_asset(self, asset_id: str) -> Asset | None:
        pass

    @abstractmethod
    def get_all_assets(self) -> list[Asset]:
        pass

    @abstractmethod
    def update_asset(self, asset: Asset) -> None:
        pass

    @abstractmethod
    def delete_asset(self, asset_id: str) -> bool:
        pass

    @abstractmethod
    def create_unit(self, unit: Unit) -> None:
        pass

    @abstractmethod
    def get_unit(self, unit_id: str) -> Unit | None:
        pass

    @abstractmethod
    def get_all_units(self) -> list[Unit]:
        pass

    @abstractmethod
    def update_unit(self, unit: Unit) -> bool:
        """Rewrite symbol and name; False if the unit does not exist."""
        pass

    @abstractmethod
    def delete_unit(self, unit_id: str) -> bool:
        pass

    @abstractmethod
    def create_conversion(self, conversion: UnitConversion) -> None:
        pass

    @abstractmethod
    def get_conversion(
        self, from_unit_id: str, to_unit_id: str
    ) -> UnitConversion | None:
        pass

    @abstractmethod
    def get_conversions_from(self, from_unit_id: str) -> list[UnitConversion]:
        pass

    @abstractmethod
    def get_all_conversions(self) -> list[UnitConversion]:
        pass

    @abstractmethod
    def update_conversion(self, conversion: UnitConversion) -> bool:
        """Rewrite the factor; False if the pair has no conversion."""
        pass

    @abstractmethod
    def delete_conversion(self, from_unit_id: str, to_unit_id: str) -> bool:
        pass

    @abstractmethod
    def add_point(self, point: TimeSeriesPoint) -> None:
        pass

    @abstractmethod
    def add_points(self, points: list[TimeSeriesPoint]) -> int:
        pass

    @abstractmethod
    def get_points(
        self,
        asset_id: str,
        from_ms: int,
        to_ms: int,
        unit_id: str | None = None,
    ) -> list[TimeSeriesPoint]:
        pass

    @abstractmethod
    def get_latest_point(
        self, asset_id: str, unit_id: str | None = None
    ) -> TimeSeriesPoint | None:
        pass

    @abstractmethod
    def delete_points(self, asset_id: str, from_ms: int, to_ms: int) -> int:
        pass

    @abstractmethod
    def delete_all_points(self, asset_id: str) -> int:
        pass

    @abstractmethod
    def convert(
        self, value: float, from_unit_id: str, to_unit_id: str
    ) -> float | None:
        pass


class NetworkDataRepository(ABC):
    """Fetches time series for an instrument from a remote source.

    Point ordering is defined by the implementation; callers must not rely on it
    unless the implementation documents one.
    """

    @abstractmethod
    def fetch_time_series_data(self, instrument_id: str) -> list[TimeSeriesPoint]:
        pass
