"""Tests for CLI parsing and rendering."""

import threading

import pytest
from rich.console import Console

from cli.cli_app import NeoCLI
from cli.main import build_parser
from cli.status_display import get_auth_status, show_banks, show_token_status
from neonomics import Bank, Outcome, PreparedRequest, ResumptionHandle, StepUpDescriptor
from neonomics.sca import Continuation
from neonomics.oauth import TokenPair, TokenStorage


def test_parse_transactions():
    args = build_parser().parse_args(["--debug", "transactions", "s-1", "acc-1"])
    assert args.debug
    assert args.command == "transactions"
    assert (args.session_id, args.account_id) == ("s-1", "acc-1")


def test_bank_filters_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["banks", "--country", "NO", "--name", "DNB"])


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_auth_status(tmp_path):
    storage = TokenStorage(str(tmp_path / "tokens.json"))
    assert get_auth_status(storage)[0] == "NO AUTH"

    storage.save_token(TokenPair(access_token="a", expires_in=3600))
    status, detail = get_auth_status(storage)
    assert status == "VALID"
    assert detail.startswith("Expires in")


def test_token_status_hides_secrets(tmp_path):
    storage = TokenStorage(str(tmp_path / "tokens.json"))
    storage.save_token(TokenPair(access_token="secret-access", refresh_token="secret-refresh", expires_in=3600))
    console = Console(record=True, width=120)

    show_token_status(storage, console)

    output = console.export_text()
    assert "Token File" in output
    assert "secret-access" not in output
    assert "secret-refresh" not in output


def test_show_banks():
    console = Console(record=True, width=120)
    show_banks([Bank(id="dnb", bank_display_name="DNB", country_code="NO", status="AVAILABLE")], console)
    output = console.export_text()
    assert "dnb" in output
    assert "AVAILABLE" in output


class ResumingAPI:
    def __init__(self, value):
        self.value = value
        self.resumed = []

    async def resume(self, handle):
        self.resumed.append(handle)
        return Outcome(value=self.value)


def suspended_outcome() -> Outcome:
    handle = ResumptionHandle(
        descriptor=StepUpDescriptor(url="https://bank.example.com/consent", id="s-1"),
        continuation=Continuation(request=PreparedRequest(method="GET", target="/ics/v3/accounts"), expected_status=200),
    )
    return Outcome(handle=handle)


def bare_cli() -> NeoCLI:
    # Skip __init__: it reconfigures the root logger
    cli = NeoCLI.__new__(NeoCLI)
    cli.console = Console(record=True, width=120)
    return cli


@pytest.mark.asyncio
async def test_step_up_prompt_runs_off_the_event_loop(monkeypatch):
    loop_thread = threading.get_ident()
    prompt_threads = []

    def answer(*args, **kwargs):
        prompt_threads.append(threading.get_ident())
        return True

    monkeypatch.setattr("cli.cli_app.Confirm.ask", answer)
    api = ResumingAPI(["acc-1"])
    outcome = suspended_outcome()

    value = await bare_cli()._finish(api, outcome)

    assert value == ["acc-1"]
    assert api.resumed == [outcome.handle]
    assert len(prompt_threads) == 1
    assert prompt_threads[0] != loop_thread


@pytest.mark.asyncio
async def test_declined_step_up_stops(monkeypatch):
    monkeypatch.setattr("cli.cli_app.Confirm.ask", lambda *args, **kwargs: False)
    api = ResumingAPI(["acc-1"])

    assert await bare_cli()._finish(api, suspended_outcome()) is None
    assert api.resumed == []
