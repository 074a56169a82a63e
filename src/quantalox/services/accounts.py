"""Account use cases."""

from dataclasses import dataclass

from quantalox.domain.entities import Account
from quantalox.exceptions import AccountAlreadyExistsError, CreateAccountError
from quantalox.logging_config import get_logger
from quantalox.repositories.interfaces import AccountRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class CreateAccountRequest:
    id: str
    name: str
    created_at: int
    password_hash: bytes | None = None


@dataclass(frozen=True)
class CreateAccountResponse:
    id: str
    name: str
    created_at: int


class CreateAccountInteractor:
    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    def execute(self, request: CreateAccountRequest) -> CreateAccountResponse:
        """Create a new account.

        Args:
            request: The account to create

        Returns:
            The stored account's id, name and creation time

        Raises:
            CreateAccountError: If id or name is empty, or either is already taken

        Any other repository failure propagates unchanged.
        """
        if not request.id:
            raise CreateAccountError("Account ID cannot be empty")
        if not request.name:
            raise CreateAccountError("Account name cannot be empty")

        if self._repository.account_exists(request.id):
            raise CreateAccountError(
                "Account with this ID already exists",
                context={"account_id": request.id},
            )
        if self._repository.account_exists_by_name(request.name):
            raise CreateAccountError(
                "Account with this name already exists",
                context={"name": request.name},
            )

        account = Account(
            id=request.id,
            name=request.name,
            password_hash=request.password_hash,
            created_at=request.created_at,
        )
        try:
            self._repository.create_account(account)
        except AccountAlreadyExistsError as e:
            # Lost a race with a concurrent writer
            raise CreateAccountError(
                f"Account already exists: {e.message}",
                context=e.context,
            ) from e

        logger.info("create_account_succeeded", account_id=account.id)
        return CreateAccountResponse(
            id=account.id,
            name=account.name,
            created_at=account.created_at,
        )
