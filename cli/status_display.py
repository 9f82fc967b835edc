"""Status display functionality for CLI"""

from typing import List

from rich.table import Table

import settings
from config import get_config_loader
from neonomics import Account, Bank, Transaction
from neonomics.oauth import TokenStorage


def show_token_status(storage: TokenStorage, console):
    """
    Display detailed token status

    Args:
        storage: TokenStorage instance
        console: Rich console for output
    """
    status = storage.get_status()

    table = Table(title="Token Status Details")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Has Tokens", "Yes" if status.has_tokens else "No")
    table.add_row("Is Expired", "Yes" if status.is_expired else "No")
    table.add_row("Has Refresh Token", "Yes" if status.has_refresh_token else "No")

    if status.expires_at:
        table.add_row("Expires At", status.expires_at.isoformat(timespec="seconds"))
        table.add_row("Time Until Expiry", status.time_until_expiry)

    table.add_row("Token File", str(storage.token_file))

    console.print(table)


def show_config(console):
    """Display the effective client configuration, hiding the secret"""
    loader = get_config_loader()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    rows = [
        ("NEO_ENVIRONMENT", settings.NEO_ENVIRONMENT),
        ("NEO_BASE_URL", settings.default_base_url()),
        ("NEO_AUTH_REALM", settings.NEO_AUTH_REALM),
        ("NEO_CLIENT_ID", settings.NEO_CLIENT_ID or "[red]missing[/red]"),
        ("NEO_CLIENT_SECRET", "set" if settings.NEO_CLIENT_SECRET else "[red]missing[/red]"),
        ("NEO_DEVICE_ID", settings.NEO_DEVICE_ID),
    ]
    for name, value in rows:
        table.add_row(name, value, loader.source_of(name))

    console.print(table)


def get_auth_status(storage: TokenStorage) -> tuple[str, str]:
    """
    Get authentication status and expiry info

    Returns:
        Tuple of (status, detail_message)
    """
    status = storage.get_status()

    if not status.has_tokens:
        return "NO AUTH", "No tokens available"

    if status.is_expired:
        if storage.can_refresh():
            return "EXPIRED", f"Expired {status.time_until_expiry}, refresh token still usable"
        return "EXPIRED", f"Expired {status.time_until_expiry}"

    return "VALID", f"Expires in {status.time_until_expiry}"


def show_banks(banks: List[Bank], console):
    table = Table(title=f"Banks ({len(banks)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Country")
    table.add_column("BIC")
    table.add_column("Status")

    for bank in banks:
        status_style = "green" if bank.available else "yellow"
        table.add_row(
            bank.id,
            bank.bank_display_name or bank.bank_official_name,
            bank.country_code,
            bank.bic,
            f"[{status_style}]{bank.status}[/{status_style}]",
        )

    console.print(table)


def show_accounts(accounts: List[Account], console):
    table = Table(title=f"Accounts ({len(accounts)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("IBAN / BBAN")
    table.add_column("Owner")
    table.add_column("Balance", justify="right")

    for account in accounts:
        balance = ""
        if account.balances:
            first = account.balances[0]
            balance = f"{first.amount} {first.currency}"
        table.add_row(
            account.id,
            account.display_name or account.account_name,
            account.iban or account.bban,
            account.owner_name,
            balance,
        )

    console.print(table)


def show_transactions(transactions: List[Transaction], console):
    table = Table(title=f"Transactions ({len(transactions)})")
    table.add_column("Booked", style="cyan")
    table.add_column("Counterparty")
    table.add_column("Reference")
    table.add_column("Amount", justify="right")

    for tx in transactions:
        amount = ""
        if tx.transaction_amount is not None:
            sign = "-" if tx.credit_debit_indicator == "DBIT" else ""
            amount = f"{sign}{tx.transaction_amount.value} {tx.transaction_amount.currency}"
        booked = tx.booking_date.date().isoformat() if tx.booking_date else ""
        table.add_row(booked, tx.counterparty_name, tx.transaction_reference, amount)

    console.print(table)
