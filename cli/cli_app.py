"""Main CLI application class for the Neonomics client"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

import settings
from neonomics import NeoAPI, NeoClient, NeoError, Outcome, ResumptionHandle
from neonomics.oauth import TokenPair, TokenStorage
from cli.debug_setup import setup_logging
from cli.status_display import (
    get_auth_status,
    show_accounts,
    show_banks,
    show_config,
    show_token_status,
    show_transactions,
)


class NeoCLI:
    """Command-line front end driving a NeoClient"""

    def __init__(
        self,
        debug: bool = False,
        base_url: Optional[str] = None,
        token_file: Optional[str] = None,
        log_file: Optional[str] = None,
        console: Optional[Console] = None
    ):
        self.debug = debug
        self.base_url = base_url
        self.console = console or Console()
        self.storage = TokenStorage(token_file)

        setup_logging(debug, self.console, log_file)
        if debug:
            self.console.print("[yellow]Debug mode enabled - requests are logged[/yellow]")

    def _client(self) -> NeoClient:
        if not settings.NEO_CLIENT_ID or not settings.NEO_CLIENT_SECRET:
            raise NeoError("NEO_CLIENT_ID and NEO_CLIENT_SECRET must be configured")
        return NeoClient.from_settings(base_url=self.base_url, storage=self.storage)

    async def _token(self, client: NeoClient) -> TokenPair:
        """Reuse the stored token pair when possible"""
        token = self.storage.load_token()
        if token is not None and not self.storage.is_token_expired():
            return token

        if token is not None and self.storage.can_refresh():
            self.console.print("[yellow]Token expired, attempting automatic refresh...[/yellow]")
            try:
                token = await client.refresh_token(token)
                self.storage.save_token(token)
                return token
            except NeoError as e:
                self.console.print(f"[yellow]Refresh failed ({e}), requesting a new token[/yellow]")

        return await client.access_token()

    async def _run(self, command: Callable[[NeoAPI], Awaitable[Any]]) -> Any:
        async with self._client() as client:
            api = await client.api(token=await self._token(client))
            return await command(api)

    async def _finish(self, api: NeoAPI, outcome: Outcome) -> Optional[Any]:
        """Walk the user through step-ups until the call completes

        Returns:
            The call result, or None if the user gave up
        """
        while outcome.handle is not None:
            # Prompt off the event loop thread
            if not await asyncio.to_thread(self._prompt_step_up, outcome.handle):
                return None
            outcome = await api.resume(outcome.handle)
        return outcome.value

    def _prompt_step_up(self, handle: ResumptionHandle) -> bool:
        message = handle.error.message if handle.error is not None else "Consent required"
        self.console.print(Panel.fit(
            f"[bold]{message}[/bold]\n\n"
            f"Open this URL and complete the authentication:\n[cyan]{handle.url}[/cyan]",
            title="Step-up required",
            border_style="yellow"
        ))
        return Confirm.ask("Done?", console=self.console, default=True)

    def run(self, command: Callable[[NeoAPI], Awaitable[Any]]) -> int:
        """Run an async command, reporting client errors

        Returns:
            Process exit code
        """
        try:
            asyncio.run(self._run(command))
        except NeoError as e:
            self.console.print(f"[red]ERROR:[/red] {e}")
            return 1
        return 0

    # Commands

    def auth(self) -> int:
        async def obtain():
            async with self._client() as client:
                await client.access_token()

        try:
            asyncio.run(obtain())
        except NeoError as e:
            self.console.print(f"[red]ERROR:[/red] Authentication failed: {e}")
            return 1

        self.console.print("[green]✓ Access token obtained[/green]")
        show_token_status(self.storage, self.console)
        return 0

    def status(self) -> int:
        status, detail = get_auth_status(self.storage)
        color = "green" if status == "VALID" else "yellow"
        self.console.print(f"[{color}]{status}[/{color}] {detail}")
        show_token_status(self.storage, self.console)
        show_config(self.console)
        return 0

    def banks(self, country: Optional[str] = None, name: Optional[str] = None) -> int:
        async def command(api: NeoAPI):
            if country:
                banks = await api.banks_by_country(country)
            elif name:
                banks = await api.banks_by_name(name)
            else:
                banks = await api.banks()
            show_banks(banks, self.console)

        return self.run(command)

    def session(self, bank_id: str) -> int:
        async def command(api: NeoAPI):
            session = await api.new_session(bank_id)
            self.console.print(f"[green]✓ Session created:[/green] {session.id}")

        return self.run(command)

    def accounts(self, session_id: str) -> int:
        async def command(api: NeoAPI):
            accounts = await self._finish(api, await api.accounts(session_id))
            if accounts is None:
                self.console.print("[yellow]Step-up not completed[/yellow]")
                return
            show_accounts(accounts, self.console)

        return self.run(command)

    def transactions(self, session_id: str, account_id: str) -> int:
        async def command(api: NeoAPI):
            transactions = await self._finish(api, await api.transactions(session_id, account_id))
            if transactions is None:
                self.console.print("[yellow]Step-up not completed[/yellow]")
                return
            show_transactions(transactions, self.console)

        return self.run(command)
