"""Command-line interface for Quantalox."""

import argparse
import sys
from datetime import UTC, datetime
from pathlib import Path

from quantalox import __version__
from quantalox.config import Settings, get_settings
from quantalox.container import Container
from quantalox.domain.entities import epoch_ms_now
from quantalox.exceptions import AccountNotFoundError, CreateAccountError, NetworkError
from quantalox.logging_config import configure_logging
from quantalox.services.accounts import CreateAccountRequest


def get_settings_for(args: argparse.Namespace) -> Settings:
    """Settings from the environment, with --database taking precedence."""
    settings = get_settings()
    database = getattr(args, "database", None)
    if database:
        settings = settings.model_copy(update={"sqlite_path": Path(database)})
    return settings


def open_container(args: argparse.Namespace) -> Container:
    return Container(get_settings_for(args))


def _format_timestamp_ms(value: int) -> str:
    return datetime.fromtimestamp(value / 1000, UTC).isoformat()


def cmd_init(args: argparse.Namespace) -> int:
    """Create the database and all tables."""
    with open_container(args) as container:
        container.database
        print(f"Initialized database at {container.settings.sqlite_path}")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    print(f"Quantalox v{__version__}")
    return 0


def cmd_create_account(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        request = CreateAccountRequest(
            id=args.id,
            name=args.name,
            created_at=epoch_ms_now(),
        )
        try:
            response = container.create_account_interactor.execute(request)
        except CreateAccountError as e:
            print(f"Error: {e.message}")
            return 1
    print(f"Account created: id={response.id}, name={response.name}")
    return 0


def cmd_get_account(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        account = container.account_repository.get_account(args.id)
    if account is None:
        print(f"Account not found: {args.id}")
        return 1
    print(
        f"id={account.id}, name={account.name}, "
        f"created_at={_format_timestamp_ms(account.created_at)}"
    )
    return 0


def cmd_list_accounts(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        accounts = container.account_repository.get_all_accounts()
    if not accounts:
        print("No accounts")
        return 0
    print(f"Accounts: {len(accounts)}")
    for account in accounts:
        print(f"  - {account.id}: {account.name}")
    return 0


def cmd_delete_account(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        removed = container.account_repository.delete_account(args.id)
    if removed:
        print(f"Account deleted: {args.id}")
    else:
        print(f"No account with id {args.id}; nothing deleted")
    return 0


def cmd_set_property(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        try:
            container.account_repository.set_property(
                args.account_id, args.key, args.value, args.description
            )
        except AccountNotFoundError as e:
            print(f"Error: {e.message}")
            return 1
    print(f"Property set: {args.account_id}.{args.key}={args.value}")
    return 0


def cmd_get_property(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        prop = container.account_repository.get_property(args.account_id, args.key)
    if prop is None:
        print(f"Property not found: {args.account_id}.{args.key}")
        return 1
    line = f"{prop.key}={prop.value}"
    if prop.description:
        line += f"  # {prop.description}"
    print(line)
    return 0


def cmd_list_properties(args: argparse.Namespace) -> int:
    with open_container(args) as container:
        repo = container.account_repository
        if args.prefix:
            props = repo.get_properties_by_prefix(args.account_id, args.prefix)
        else:
            props = repo.get_properties(args.account_id)
    if not props:
        print(f"No properties for {args.account_id}")
        return 0
    for prop in props:
        print(f"{prop.key}={prop.value}")
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    """Fetch an instrument's intraday series, optionally storing it."""
    with open_container(args) as container:
        try:
            if args.store:
                written = container.time_series_import_service.import_instrument(
                    args.instrument_id, name=args.name
                )
                print(f"Stored {written} points for {args.instrument_id}")
                return 0
            points = container.network_data_repository.fetch_time_series_data(
                args.instrument_id
            )
        except NetworkError as e:
            print(f"Error: {e.message}")
            return 1

    print(f"Points: {len(points)}")
    for point in points[-args.limit :] if args.limit else points:
        print(f"  {_format_timestamp_ms(point.timestamp_ms)}  {point.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qx",
        description="Quantalox - portfolio accounts and market data",
    )
    parser.add_argument(
        "--database",
        "-d",
        help="Path to SQLite database file",
        default=None,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Initialize the database")
    init_parser.set_defaults(func=cmd_init)

    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    create_parser = subparsers.add_parser("create-account", help="Create an account")
    create_parser.add_argument("id", help="Account id")
    create_parser.add_argument("name", help="Unique account name")
    create_parser.set_defaults(func=cmd_create_account)

    get_parser = subparsers.add_parser("get-account", help="Show an account by id")
    get_parser.add_argument("id", help="Account id")
    get_parser.set_defaults(func=cmd_get_account)

    list_parser = subparsers.add_parser("list-accounts", help="List all accounts")
    list_parser.set_defaults(func=cmd_list_accounts)

    delete_parser = subparsers.add_parser(
        "delete-account", help="Delete an account and its properties"
    )
    delete_parser.add_argument("id", help="Account id")
    delete_parser.set_defaults(func=cmd_delete_account)

    set_prop_parser = subparsers.add_parser(
        "set-property", help="Create or overwrite an account property"
    )
    set_prop_parser.add_argument("account_id")
    set_prop_parser.add_argument("key")
    set_prop_parser.add_argument("value")
    set_prop_parser.add_argument("--description", default=None)
    set_prop_parser.set_defaults(func=cmd_set_property)

    get_prop_parser = subparsers.add_parser(
        "get-property", help="Show an account property"
    )
    get_prop_parser.add_argument("account_id")
    get_prop_parser.add_argument("key")
    get_prop_parser.set_defaults(func=cmd_get_property)

    list_props_parser = subparsers.add_parser(
        "list-properties", help="List an account's properties"
    )
    list_props_parser.add_argument("account_id")
    list_props_parser.add_argument(
        "--prefix", default=None, help="Only keys starting with this prefix"
    )
    list_props_parser.set_defaults(func=cmd_list_properties)

    fetch_parser = subparsers.add_parser(
        "fetch", help="Fetch intraday time series for an instrument"
    )
    fetch_parser.add_argument("instrument_id")
    fetch_parser.add_argument(
        "--store", action="store_true", help="Store the points in the database"
    )
    fetch_parser.add_argument("--name", default=None, help="Asset name when storing")
    fetch_parser.add_argument(
        "--limit", type=int, default=20, help="Print only the last N points (0 = all)"
    )
    fetch_parser.set_defaults(func=cmd_fetch)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    configure_logging(get_settings_for(args))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
