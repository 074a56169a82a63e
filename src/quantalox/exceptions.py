"""Exception hierarchy for Quantalox.

All application exceptions inherit from QuantaloxError so callers can catch
everything with one base class while keeping specific types for each layer.

Repositories never raise for "not found": lookups return None or an empty
list. Exceptions are reserved for failures.
"""

from typing import Any


class QuantaloxError(Exception):
    """Base exception for all Quantalox errors.

    Includes an error_code for machine-readable reporting and extra context.
    """

    error_code: str = "QX_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured output."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Account Errors
# =============================================================================


class AccountError(QuantaloxError):
    """Base exception for account-related errors."""

    error_code = "ACCOUNT_ERROR"


class AccountNotFoundError(AccountError):
    """Raised when a write targets an account that does not exist."""

    error_code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str) -> None:
        super().__init__(
            f"Account not found: {account_id}",
            context={"account_id": account_id},
        )
        self.account_id = account_id


class AccountAlreadyExistsError(AccountError):
    """Raised when an account id or name collides with an existing account."""

    error_code = "ACCOUNT_ALREADY_EXISTS"

    def __init__(self, account_id: str, name: str) -> None:
        super().__init__(
            f"Account already exists: id={account_id}, name={name}",
            context={"account_id": account_id, "name": name},
        )
        self.account_id = account_id
        self.name = name


class CreateAccountError(AccountError):
    """Business-rule violation raised by the create-account use case."""

    error_code = "CREATE_ACCOUNT_ERROR"


# =============================================================================
# Database Errors
# =============================================================================


class DatabaseError(QuantaloxError):
    """Base exception for database-related errors."""

    error_code = "DATABASE_ERROR"


class IntegrityError(DatabaseError):
    """Raised when a database integrity constraint is violated."""

    error_code = "DATABASE_INTEGRITY_ERROR"


class QueryError(DatabaseError):
    """Raised when a statement fails to execute."""

    error_code = "DATABASE_QUERY_ERROR"

    def __init__(self, message: str, sql: str | None = None) -> None:
        context = {"sql": sql} if sql else {}
        super().__init__(f"Query error: {message}", context=context)


class RowMappingError(DatabaseError):
    """Raised when a stored row does not have the shape its mapper expects.

    This is an internal-consistency failure, not a recoverable condition.
    """

    error_code = "ROW_MAPPING_ERROR"

    def __init__(self, table: str, reason: str) -> None:
        super().__init__(
            f"Malformed row in {table}: {reason}",
            context={"table": table, "reason": reason},
        )


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(QuantaloxError):
    """Base exception for HTTP transport failures."""

    error_code = "NETWORK_ERROR"


class NetworkConnectionError(NetworkError):
    """Raised when a connection to the remote host cannot be established."""

    error_code = "NETWORK_CONNECTION_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(f"Connection error: {message}")


class HttpStatusError(NetworkError):
    """Raised when a response carries a status code outside 2xx."""

    error_code = "HTTP_STATUS_ERROR"
    max_message_length = 500

    def __init__(self, status_code: int, message: str) -> None:
        # The message is usually the response body, which can be a full HTML page
        if len(message) > self.max_message_length:
            message = message[: self.max_message_length] + "..."
        super().__init__(
            f"HTTP {status_code}: {message}",
            context={"status_code": status_code},
        )
        self.status_code = status_code


class NetworkTimeoutError(NetworkError):
    """Raised when the connect or read deadline is exceeded."""

    error_code = "NETWORK_TIMEOUT"

    def __init__(self, message: str) -> None:
        super().__init__(f"Timeout: {message}")
