"""CLI entry point and argument parsing"""

import sys
import argparse
from rich.console import Console
from cli.cli_app import NeoCLI


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Neonomics open-banking client CLI")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--base-url", default=None, help="Override API base URL (default: from config)")
    parser.add_argument("--token-file", default=None, help="Override token file (default: from config)")
    parser.add_argument("--log-file", default=None, help="Also append log records to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("auth", help="Obtain an access token with the client credentials")
    subparsers.add_parser("status", help="Show the stored token status")

    banks = subparsers.add_parser("banks", help="List supported banks")
    filters = banks.add_mutually_exclusive_group()
    filters.add_argument("--country", default=None, help="Only banks of this country code (e.g. NO)")
    filters.add_argument("--name", default=None, help="Only banks matching this name")

    session = subparsers.add_parser("session", help="Open a session with a bank")
    session.add_argument("bank_id")

    accounts = subparsers.add_parser("accounts", help="List the accounts of a session")
    accounts.add_argument("session_id")

    transactions = subparsers.add_parser("transactions", help="List the transactions of an account")
    transactions.add_argument("session_id")
    transactions.add_argument("account_id")

    return parser


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)

    try:
        cli = NeoCLI(
            debug=args.debug,
            base_url=args.base_url,
            token_file=args.token_file,
            log_file=args.log_file,
            console=console
        )

        if args.command == "auth":
            code = cli.auth()
        elif args.command == "status":
            code = cli.status()
        elif args.command == "banks":
            code = cli.banks(country=args.country, name=args.name)
        elif args.command == "session":
            code = cli.session(args.bank_id)
        elif args.command == "accounts":
            code = cli.accounts(args.session_id)
        else:
            code = cli.transactions(args.session_id, args.account_id)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        code = 130

    sys.exit(code)


if __name__ == "__main__":
    main()
