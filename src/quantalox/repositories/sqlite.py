"""SQLite implementations of repository interfaces."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

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
from quantalox.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    IntegrityError,
    QueryError,
    RowMappingError,
)
from quantalox.logging_config import get_logger
from quantalox.repositories.database import Database, Params, Row
from quantalox.repositories.interfaces import (
    AccountRepository,
    SettingRepository,
    TimeSeriesRepository,
    UserRepository,
)

logger = get_logger(__name__)

# Exact, case-sensitive prefix match. LIKE would fold ASCII case and treat
# % and _ in the prefix as wildcards.
_PREFIX_MATCH = "substr({column}, 1, ?) = ?"


def _prefix_params(prefix: str) -> tuple[int, str]:
    return (len(prefix), prefix)


class SQLiteDatabase(Database):
    """SQLite database connection manager."""

    def __init__(
        self, path: str | Path = ":memory:", check_same_thread: bool = True
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._connection: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    def get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self._path, check_same_thread=self._check_same_thread
            )
            self._connection.row_factory = sqlite3.Row
            # Property rows cascade with their account
            self._connection.execute("PRAGMA foreign_keys = ON")
        return self._connection

    def initialize(self) -> None:
        """Create all database tables."""
        SQLiteAccountRepository(self).initialize_schema()
        SQLiteUserRepository(self).initialize_schema()
        SQLiteSettingRepository(self).initialize_schema()
        SQLiteTimeSeriesRepository(self).initialize_schema()
        logger.debug("database_initialized", path=self._path)

    @contextmanager
    def _translate_errors(self, sql: str) -> Iterator[sqlite3.Connection]:
        conn = self.get_connection()
        try:
            yield conn
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise IntegrityError(str(e), context={"sql": sql}) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise QueryError(str(e), sql=sql) from e

    def execute(self, sql: str, params: Params = ()) -> None:
        with self._translate_errors(sql) as conn:
            conn.execute(sql, params)
            conn.commit()

    def executescript(self, script: str) -> None:
        with self._translate_errors(script) as conn:
            conn.executescript(script)
            conn.commit()

    def query(self, sql: str, params: Params = ()) -> list[Row]:
        with self._translate_errors(sql) as conn:
            return conn.execute(sql, params).fetchall()

    def query_one(self, sql: str, params: Params = ()) -> Row | None:
        with self._translate_errors(sql) as conn:
            return conn.execute(sql, params).fetchone()

    def execute_update(self, sql: str, params: Params = ()) -> int:
        with self._translate_errors(sql) as conn:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor.rowcount

    def execute_many(self, sql: str, rows: Iterable[Params]) -> int:
        with self._translate_errors(sql) as conn:
            cursor = conn.executemany(sql, rows)
            conn.commit()
            return cursor.rowcount

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None


# =============================================================================
# Row mapping helpers
# =============================================================================


def _check_width(row: Row, table: str, width: int) -> None:
    if len(row) != width:
        raise RowMappingError(table, f"expected {width} columns, got {len(row)}")


def _column(
    row: Row,
    index: int,
    expected: type | tuple[type, ...],
    table: str,
    nullable: bool = False,
) -> Any:
    value = row[index]
    if value is None:
        if nullable:
            return None
        raise RowMappingError(table, f"column {index} is NULL")
    # bool is an int subclass; sqlite never returns it, a mock row might
    if isinstance(value, bool) or not isinstance(value, expected):
        raise RowMappingError(
            table,
            f"column {index} has type {type(value).__name__}",
        )
    return value


def _real(row: Row, index: int, table: str) -> float:
    return float(_column(row, index, (int, float), table))


# =============================================================================
# Accounts
# =============================================================================


class SQLiteAccountRepository(AccountRepository):
    _ACCOUNT_COLUMNS = "id, name, password_hash, created_at"
    _PROPERTY_COLUMNS = "account_id, key, value, description"

    def __init__(self, database: Database) -> None:
        self._db = database

    def initialize_schema(self) -> None:
        self._db.executescript(
            """
            CREATE TABLE IF NOT EXISTS accounts (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE,
                password_hash BLOB,
                created_at INTEGER NOT NULL
            );

            CREATE TABLE IF NOT EXISTS account_properties (
                account_id TEXT NOT NULL,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                description TEXT,
                PRIMARY KEY (account_id, key),
                FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_accounts_name ON accounts(name);
            """
        )

    def create_account(self, account: Account) -> None:
        try:
            self._db.execute(
                """
                INSERT INTO accounts (id, name, password_hash, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    account.id,
                    account.name,
                    account.password_hash,
                    account.created_at,
                ),
            )
        except IntegrityError as e:
            if "UNIQUE" not in e.message:
                raise
            raise AccountAlreadyExistsError(account.id, account.name) from e
        logger.info("account_created", account_id=account.id)

    def get_account(self, account_id: str) -> Account | None:
        row = self._db.query_one(
            f"SELECT {self._ACCOUNT_COLUMNS} FROM accounts WHERE id = ?",
            (account_id,),
        )
        if row is None:
            return None
        return self._row_to_account(row)

    def get_account_by_name(self, name: str) -> Account | None:
        row = self._db.query_one(
            f"SELECT {self._ACCOUNT_COLUMNS} FROM accounts WHERE name = ?",
            (name,),
        )
        if row is None:
            return None
        return self._row_to_account(row)

    def get_all_accounts(self) -> list[Account]:
        rows = self._db.query(
            f"SELECT {self._ACCOUNT_COLUMNS} FROM accounts ORDER BY name"
        )
        return [self._row_to_account(row) for row in rows]

    def update_account(self, account: Account) -> None:
        """Replace the mutable fields of an existing account.

        The id and created_at are never rewritten.

        Raises:
            AccountNotFoundError: If no account has this id
            AccountAlreadyExistsError: If the new name belongs to another account
        """
        try:
            affected = self._db.execute_update(
                "UPDATE accounts SET name = ?, password_hash = ? WHERE id = ?",
                (account.name, account.password_hash, account.id),
            )
        except IntegrityError as e:
            if "UNIQUE" not in e.message:
                raise
            raise AccountAlreadyExistsError(account.id, account.name) from e
        if affected == 0:
            raise AccountNotFoundError(account.id)

    def delete_account(self, account_id: str) -> bool:
        affected = self._db.execute_update(
            "DELETE FROM accounts WHERE id = ?", (account_id,)
        )
        if affected:
            logger.info("account_deleted", account_id=account_id)
        return affected > 0

    def account_exists(self, account_id: str) -> bool:
        row = self._db.query_one("SELECT 1 FROM accounts WHERE id = ?", (account_id,))
        return row is not None

    def account_exists_by_name(self, name: str) -> bool:
        row = self._db.query_one("SELECT 1 FROM accounts WHERE name = ?", (name,))
        return row is not None

    def set_property(
        self,
        account_id: str,
        key: str,
        value: str,
        description: str | None = None,
    ) -> None:
        try:
            self._db.execute(
                """
                INSERT INTO account_properties (account_id, key, value, description)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(account_id, key) DO UPDATE SET
                    value = excluded.value,
                    description = excluded.description
                """,
                (account_id, key, value, description),
            )
        except IntegrityError as e:
            if "FOREIGN KEY" not in e.message:
                raise
            raise AccountNotFoundError(account_id) from e

    def set_property_entry(self, prop: AccountProperty) -> None:
        self.set_property(prop.account_id, prop.key, prop.value, prop.description)

    def get_property(self, account_id: str, key: str) -> AccountProperty | None:
        row = self._db.query_one(
            f"""
            SELECT {self._PROPERTY_COLUMNS} FROM account_properties
            WHERE account_id = ? AND key = ?
            """,
            (account_id, key),
        )
        if row is None:
            return None
        return self._row_to_property(row)

    def get_property_value(self, account_id: str, key: str) -> str | None:
        row = self._db.query_one(
            "SELECT value FROM account_properties WHERE account_id = ? AND key = ?",
            (account_id, key),
        )
        if row is None:
            return None
        _check_width(row, "account_properties", 1)
        return _column(row, 0, str, "account_properties")

    def get_properties(self, account_id: str) -> list[AccountProperty]:
        rows = self._db.query(
            f"""
            SELECT {self._PROPERTY_COLUMNS} FROM account_properties
            WHERE account_id = ? ORDER BY key
            """,
            (account_id,),
        )
        return [self._row_to_property(row) for row in rows]

    def get_properties_by_prefix(
        self, account_id: str, prefix: str
    ) -> list[AccountProperty]:
        rows = self._db.query(
            f"""
            SELECT {self._PROPERTY_COLUMNS} FROM account_properties
            WHERE account_id = ? AND {_PREFIX_MATCH.format(column="key")}
            ORDER BY key
            """,
            (account_id, *_prefix_params(prefix)),
        )
        return [self._row_to_property(row) for row in rows]

    def property_exists(self, account_id: str, key: str) -> bool:
        row = self._db.query_one(
            "SELECT 1 FROM account_properties WHERE account_id = ? AND key = ?",
            (account_id, key),
        )
        return row is not None

    def remove_property(self, account_id: str, key: str) -> None:
        self._db.execute_update(
            "DELETE FROM account_properties WHERE account_id = ? AND key = ?",
            (account_id, key),
        )

    def remove_properties_by_prefix(self, account_id: str, prefix: str) -> None:
        self._db.execute_update(
            f"""
            DELETE FROM account_properties
            WHERE account_id = ? AND {_PREFIX_MATCH.format(column="key")}
            """,
            (account_id, *_prefix_params(prefix)),
        )

    def clear_properties(self, account_id: str) -> None:
        self._db.execute_update(
            "DELETE FROM account_properties WHERE account_id = ?", (account_id,)
        )

    def count_accounts(self) -> int:
        row = self._db.query_one("SELECT COUNT(*) FROM accounts")
        assert row is not None
        return int(row[0])

    def count_properties(self, account_id: str) -> int:
        row = self._db.query_one(
            "SELECT COUNT(*) FROM account_properties WHERE account_id = ?",
            (account_id,),
        )
        assert row is not None
        return int(row[0])

    def _row_to_account(self, row: Row) -> Account:
        _check_width(row, "accounts", 4)
        return Account(
            id=_column(row, 0, str, "accounts"),
            name=_column(row, 1, str, "accounts"),
            password_hash=_column(row, 2, bytes, "accounts", nullable=True),
            created_at=_column(row, 3, int, "accounts"),
        )

    def _row_to_property(self, row: Row) -> AccountProperty:
        _check_width(row, "account_properties", 4)
        return AccountProperty(
            account_id=_column(row, 0, str, "account_properties"),
            key=_column(row, 1, str, "account_properties"),
            value=_column(row, 2, str, "account_properties"),
            description=_column(row, 3, str, "account_properties", nullable=True),
        )


# =============================================================================
# Users
# =============================================================================


class SQLiteUserRepository(UserRepository):
    _COLUMNS = "id, email, name, created_at"

    def __init__(self, database: Database) -> None:
        self._db = database

    def initialize_schema(self) -> None:
        self._db.executescript(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT UNIQUE NOT NULL,
                name TEXT NOT NULL,
                created_at INTEGER NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);
            """
        )

    def find_by_id(self, user_id: str) -> User | None:
        row = self._db.query_one(
            f"SELECT {self._COLUMNS} FROM users WHERE id = ?", (user_id,)
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def find_by_email(self, email: str) -> User | None:
        row = self._db.query_one(
            f"SELECT {self._COLUMNS} FROM users WHERE email = ?", (email,)
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def find_all(self) -> list[User]:
        rows = self._db.query(
            f"SELECT {self._COLUMNS} FROM users ORDER BY created_at DESC"
        )
        return [self._row_to_user(row) for row in rows]

    def save(self, user: User) -> User:
        """Insert the user, or update email and name if the id exists.

        A naive created_at is taken to be UTC.

        Raises:
            IntegrityError: If the email belongs to another user
        """
        created_at = user.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        self._db.execute(
            """
            INSERT INTO users (id, email, name, created_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                email = excluded.email,
                name = excluded.name
            """,
            (user.id, user.email, user.name, int(created_at.timestamp())),
        )
        return user

    def remove(self, user_id: str) -> bool:
        affected = self._db.execute_update("DELETE FROM users WHERE id = ?", (user_id,))
        return affected > 0

    def _row_to_user(self, row: Row) -> User:
        _check_width(row, "users", 4)
        timestamp = _column(row, 3, int, "users")
        return User(
            id=_column(row, 0, str, "users"),
            email=_column(row, 1, str, "users"),
            name=_column(row, 2, str, "users"),
            created_at=datetime.fromtimestamp(timestamp, UTC),
        )


# =============================================================================
# Settings
# =============================================================================


class SQLiteSettingRepository(SettingRepository):
    """Key/value settings table with the same prefix rules as account properties."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def initialize_schema(self) -> None:
        self._db.executescript(
            """
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                description TEXT
            );
            """
        )

    def set(self, key: str, value: str, description: str | None = None) -> None:
        self._db.execute(
            """
            INSERT INTO settings (key, value, description) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                description = excluded.description
            """,
            (key, value, description),
        )

    def set_entry(self, setting: Setting) -> None:
        self.set(setting.key, setting.value, setting.description)

    def get(self, key: str) -> Setting | None:
        row = self._db.query_one(
            "SELECT key, value, description FROM settings WHERE key = ?", (key,)
        )
        if row is None:
            return None
        return self._row_to_setting(row)

    def get_value(self, key: str) -> str | None:
        setting = self.get(key)
        return setting.value if setting is not None else None

    def exists(self, key: str) -> bool:
        return self._db.query_one("SELECT 1 FROM settings WHERE key = ?", (key,)) is not None

    def remove(self, key: str) -> None:
        self._db.execute_update("DELETE FROM settings WHERE key = ?", (key,))

    def get_all(self) -> list[Setting]:
        rows = self._db.query(
            "SELECT key, value, description FROM settings ORDER BY key"
        )
        return [self._row_to_setting(row) for row in rows]

    def get_by_prefix(self, prefix: str) -> list[Setting]:
        rows = self._db.query(
            f"""
            SELECT key, value, description FROM settings
            WHERE {_PREFIX_MATCH.format(column="key")} ORDER BY key
            """,
            _prefix_params(prefix),
        )
        return [self._row_to_setting(row) for row in rows]

    def get_keys(self) -> list[str]:
        rows = self._db.query("SELECT key FROM settings ORDER BY key")
        return [_column(row, 0, str, "settings") for row in rows]

    def get_keys_by_prefix(self, prefix: str) -> list[str]:
        rows = self._db.query(
            f"""
            SELECT key FROM settings
            WHERE {_PREFIX_MATCH.format(column="key")} ORDER BY key
            """,
            _prefix_params(prefix),
        )
        return [_column(row, 0, str, "settings") for row in rows]

    def remove_by_prefix(self, prefix: str) -> None:
        self._db.execute_update(
            f"DELETE FROM settings WHERE {_PREFIX_MATCH.format(column='key')}",
            _prefix_params(prefix),
        )

    def clear(self) -> None:
        self._db.execute_update("DELETE FROM settings")

    def count(self) -> int:
        row = self._db.query_one("SELECT COUNT(*) FROM settings")
        assert row is not None
        return int(row[0])

    def count_by_prefix(self, prefix: str) -> int:
        row = self._db.query_one(
            f"SELECT COUNT(*) FROM settings WHERE {_PREFIX_MATCH.format(column='key')}",
            _prefix_params(prefix),
        )
        assert row is not None
        return int(row[0])

    def _row_to_setting(self, row: Row) -> Setting:
        _check_width(row, "settings", 3)
        return Setting(
            key=_column(row, 0, str, "settings"),
            value=_column(row, 1, str, "settings"),
            description=_column(row, 2, str, "settings", nullable=True),
        )


# =============================================================================
# Time series
# =============================================================================


class SQLiteTimeSeriesRepository(TimeSeriesRepository):
    _POINT_COLUMNS = "asset_id, timestamp_ms, unit_id, value"
    _UPSERT_POINT = """
        INSERT INTO timeseries (asset_id, timestamp_ms, unit_id, value)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(asset_id, timestamp_ms, unit_id) DO UPDATE SET
            value = excluded.value
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    def initialize_schema(self) -> None:
        self._db.executescript(
            """
            CREATE TABLE IF NOT EXISTS assets (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                source TEXT NOT NULL DEFAULT ''
            );

            CREATE TABLE IF NOT EXISTS units (
                id TEXT PRIMARY KEY,
                symbol TEXT NOT NULL,
                name TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS unit_conversions (
                from_unit_id TEXT NOT NULL,
                to_unit_id TEXT NOT NULL,
                factor REAL NOT NULL,
                PRIMARY KEY (from_unit_id, to_unit_id),
                FOREIGN KEY (from_unit_id) REFERENCES units(id) ON DELETE CASCADE,
                FOREIGN KEY (to_unit_id) REFERENCES units(id) ON DELETE CASCADE
            );

            -- unit_id is free text: network sources may not report a unit
            CREATE TABLE IF NOT EXISTS timeseries (
                asset_id TEXT NOT NULL,
                timestamp_ms INTEGER NOT NULL,
                unit_id TEXT NOT NULL DEFAULT '',
                value REAL NOT NULL,
                PRIMARY KEY (asset_id, timestamp_ms, unit_id),
                FOREIGN KEY (asset_id) REFERENCES assets(id) ON DELETE CASCADE
            );
            CREATE INDEX IF NOT EXISTS idx_timeseries_asset_time
                ON timeseries(asset_id, timestamp_ms);
            """
        )

    # Assets

    def create_asset(self, asset: Asset) -> None:
        self._db.execute(
            "INSERT INTO assets (id, name, description, source) VALUES (?, ?, ?, ?)",
            (asset.id, asset.name, asset.description, asset.source),
        )

    def get_asset(self, asset_id: str) -> Asset | None:
        row = self._db.query_one(
            "SELECT id, name, description, source FROM assets WHERE id = ?",
            (asset_id,),
        )
        if row is None:
            return None
        return self._row_to_asset(row)

    def get_all_assets(self) -> list[Asset]:
        rows = self._db.query(
            "SELECT id, name, description, source FROM assets ORDER BY name"
        )
        return [self._row_to_asset(row) for row in rows]

    def update_asset(self, asset: Asset) -> None:
        self._db.execute_update(
            "UPDATE assets SET name = ?, description = ?, source = ? WHERE id = ?",
            (asset.name, asset.description, asset.source, asset.id),
        )

    def delete_asset(self, asset_id: str) -> bool:
        return self._db.execute_update("DELETE FROM assets WHERE id = ?", (asset_id,)) > 0

    # Units

    def create_unit(self, unit: Unit) -> None:
        self._db.execute(
            "INSERT INTO units (id, symbol, name) VALUES (?, ?, ?)",
            (unit.id, unit.symbol, unit.name),
        )

    def get_unit(self, unit_id: str) -> Unit | None:
        row = self._db.query_one(
            "SELECT id, symbol, name FROM units WHERE id = ?", (unit_id,)
        )
        if row is None:
            return None
        return self._row_to_unit(row)

    def get_all_units(self) -> list[Unit]:
        rows = self._db.query("SELECT id, symbol, name FROM units ORDER BY name")
        return [self._row_to_unit(row) for row in rows]

    def update_unit(self, unit: Unit) -> bool:
        affected = self._db.execute_update(
            "UPDATE units SET symbol = ?, name = ? WHERE id = ?",
            (unit.symbol, unit.name, unit.id),
        )
        return affected > 0

    def delete_unit(self, unit_id: str) -> bool:
        return self._db.execute_update("DELETE FROM units WHERE id = ?", (unit_id,)) > 0

    # Conversions

    def create_conversion(self, conversion: UnitConversion) -> None:
        self._db.execute(
            """
            INSERT INTO unit_conversions (from_unit_id, to_unit_id, factor)
            VALUES (?, ?, ?)
            """,
            (conversion.from_unit_id, conversion.to_unit_id, conversion.factor),
        )

    def get_conversion(
        self, from_unit_id: str, to_unit_id: str
    ) -> UnitConversion | None:
        row = self._db.query_one(
            """
            SELECT from_unit_id, to_unit_id, factor FROM unit_conversions
            WHERE from_unit_id = ? AND to_unit_id = ?
            """,
            (from_unit_id, to_unit_id),
        )
        if row is None:
            return None
        return self._row_to_conversion(row)

    def get_conversions_from(self, from_unit_id: str) -> list[UnitConversion]:
        rows = self._db.query(
            """
            SELECT from_unit_id, to_unit_id, factor FROM unit_conversions
            WHERE from_unit_id = ? ORDER BY to_unit_id
            """,
            (from_unit_id,),
        )
        return [self._row_to_conversion(row) for row in rows]

    def get_all_conversions(self) -> list[UnitConversion]:
        rows = self._db.query(
            """
            SELECT from_unit_id, to_unit_id, factor FROM unit_conversions
            ORDER BY from_unit_id, to_unit_id
            """
        )
        return [self._row_to_conversion(row) for row in rows]

    def update_conversion(self, conversion: UnitConversion) -> bool:
        affected = self._db.execute_update(
            """
            UPDATE unit_conversions SET factor = ?
            WHERE from_unit_id = ? AND to_unit_id = ?
            """,
            (conversion.factor, conversion.from_unit_id, conversion.to_unit_id),
        )
        return affected > 0

    def delete_conversion(self, from_unit_id: str, to_unit_id: str) -> bool:
        affected = self._db.execute_update(
            "DELETE FROM unit_conversions WHERE from_unit_id = ? AND to_unit_id = ?",
            (from_unit_id, to_unit_id),
        )
        return affected > 0

    def convert(
        self, value: float, from_unit_id: str, to_unit_id: str
    ) -> float | None:
        if from_unit_id == to_unit_id:
            return value

        conversion = self.get_conversion(from_unit_id, to_unit_id)
        if conversion is not None:
            return value * conversion.factor

        reverse = self.get_conversion(to_unit_id, from_unit_id)
        if reverse is not None and reverse.factor != 0.0:
            return value / reverse.factor

        return None

    # Points

    def add_point(self, point: TimeSeriesPoint) -> None:
        self._db.execute(self._UPSERT_POINT, self._point_params(point))

    def add_points(self, points: list[TimeSeriesPoint]) -> int:
        if not points:
            return 0
        return self._db.execute_many(
            self._UPSERT_POINT, [self._point_params(p) for p in points]
        )

    def get_points(
        self,
        asset_id: str,
        from_ms: int,
        to_ms: int,
        unit_id: str | None = None,
    ) -> list[TimeSeriesPoint]:
        sql = f"""
            SELECT {self._POINT_COLUMNS} FROM timeseries
            WHERE asset_id = ? AND timestamp_ms BETWEEN ? AND ?
        """
        params: list[Any] = [asset_id, from_ms, to_ms]
        if unit_id is not None:
            sql += " AND unit_id = ?"
            params.append(unit_id)
        sql += " ORDER BY timestamp_ms"
        rows = self._db.query(sql, params)
        return [self._row_to_point(row) for row in rows]

    def get_latest_point(
        self, asset_id: str, unit_id: str | None = None
    ) -> TimeSeriesPoint | None:
        sql = f"SELECT {self._POINT_COLUMNS} FROM timeseries WHERE asset_id = ?"
        params: list[Any] = [asset_id]
        if unit_id is not None:
            sql += " AND unit_id = ?"
            params.append(unit_id)
        sql += " ORDER BY timestamp_ms DESC LIMIT 1"
        row = self._db.query_one(sql, params)
        if row is None:
            return None
        return self._row_to_point(row)

    def delete_points(self, asset_id: str, from_ms: int, to_ms: int) -> int:
        return self._db.execute_update(
            """
            DELETE FROM timeseries
            WHERE asset_id = ? AND timestamp_ms BETWEEN ? AND ?
            """,
            (asset_id, from_ms, to_ms),
        )

    def delete_all_points(self, asset_id: str) -> int:
        return self._db.execute_update(
            "DELETE FROM timeseries WHERE asset_id = ?", (asset_id,)
        )

    @staticmethod
    def _point_params(point: TimeSeriesPoint) -> tuple[str, int, str, float]:
        return (point.asset_id, point.timestamp_ms, point.unit_id, point.value)

    def _row_to_asset(self, row: Row) -> Asset:
        _check_width(row, "assets", 4)
        return Asset(
            id=_column(row, 0, str, "assets"),
            name=_column(row, 1, str, "assets"),
            description=_column(row, 2, str, "assets"),
            source=_column(row, 3, str, "assets"),
        )

    def _row_to_unit(self, row: Row) -> Unit:
        _check_width(row, "units", 3)
        return Unit(
            id=_column(row, 0, str, "units"),
            symbol=_column(row, 1, str, "units"),
            name=_column(row, 2, str, "units"),
        )

    def _row_to_conversion(self, row: Row) -> UnitConversion:
        _check_width(row, "unit_conversions", 3)
        return UnitConversion(
            from_unit_id=_column(row, 0, str, "unit_conversions"),
            to_unit_id=_column(row, 1, str, "unit_conversions"),
            factor=_real(row, 2, "unit_conversions"),
        )

    def _row_to_point(self, row: Row) -> TimeSeriesPoint:
        _check_width(row, "timeseries", 4)
        return TimeSeriesPoint(
            asset_id=_column(row, 0, str, "timeseries"),
            timestamp_ms=_column(row, 1, int, "timeseries"),
            unit_id=_column(row, 2, str, "timeseries"),
            value=_real(row, 3, "timeseries"),
        )
