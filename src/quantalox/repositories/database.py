"""SQL execution capability consumed by the repository adapters.

Repositories hold a shared, non-owning reference to a Database. Whoever wires
the repositories owns the Database and must close it only after every
repository holding it is done.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

# Rows support positional access (row[0]) and len(row).
Row = Sequence[Any]
Params = Sequence[Any]


class Database(ABC):
    @abstractmethod
    def execute(self, sql: str, params: Params = ()) -> None:
        """Run a single statement and commit."""

    @abstractmethod
    def executescript(self, script: str) -> None:
        """Run a batch of DDL statements."""

    @abstractmethod
    def query(self, sql: str, params: Params = ()) -> list[Row]:
        """Run a parameterized read and return every row."""

    @abstractmethod
    def query_one(self, sql: str, params: Params = ()) -> Row | None:
        """Run a parameterized read and return the first row, if any."""

    @abstractmethod
    def execute_update(self, sql: str, params: Params = ()) -> int:
        """Run a write, commit, and return the number of affected rows."""

    @abstractmethod
    def execute_many(self, sql: str, rows: Iterable[Params]) -> int:
        """Run one write per parameter set inside a single transaction."""

    @abstractmethod
    def close(self) -> None:
        pass
