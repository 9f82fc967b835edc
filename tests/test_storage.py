"""Tests for on-disk token storage."""

import os
import platform
import time

import pytest

from neonomics.oauth import TokenPair, TokenStorage


@pytest.fixture
def storage(tmp_path):
    return TokenStorage(str(tmp_path / "nested" / "tokens.json"))


def test_save_and_load(storage):
    storage.save_token(TokenPair(access_token="a", refresh_token="r", expires_in=300))

    token = storage.load_token()

    assert token.access_token == "a"
    assert token.refresh_token == "r"
    assert not storage.is_token_expired()


@pytest.mark.skipif(platform.system() == "Windows", reason="POSIX permissions")
def test_token_file_is_private(storage):
    storage.save_token(TokenPair(access_token="a"))
    assert os.stat(storage.token_file).st_mode & 0o777 == 0o600


def test_expiry(storage):
    storage.save_token(TokenPair(access_token="a", expires_in=60), obtained_at=int(time.time()) - 120)

    assert storage.is_token_expired()
    status = storage.get_status()
    assert status.has_tokens
    assert status.is_expired
    assert status.time_until_expiry.endswith("ago")


def test_status_of_valid_token(storage):
    storage.save_token(TokenPair(access_token="a", refresh_token="r", expires_in=7200))

    status = storage.get_status()

    assert not status.is_expired
    assert status.has_refresh_token
    assert status.time_until_expiry.startswith("1h") or status.time_until_expiry.startswith("2h")


def test_empty_storage(storage):
    assert storage.load_token() is None
    assert storage.is_token_expired()
    assert storage.get_status().has_tokens is False


def test_unreadable_file_is_ignored(storage):
    storage.token_file.write_text("{broken")
    assert storage.load_token() is None


def test_clear(storage):
    storage.save_token(TokenPair(access_token="a"))
    storage.clear_tokens()
    assert not storage.token_file.exists()


def test_can_refresh(storage):
    assert not storage.can_refresh()

    storage.save_token(TokenPair(access_token="a"))
    assert not storage.can_refresh()

    storage.save_token(TokenPair(access_token="a", refresh_token="r", refresh_expires_in=1800))
    assert storage.can_refresh()

    storage.save_token(
        TokenPair(access_token="a", refresh_token="r", refresh_expires_in=60),
        obtained_at=int(time.time()) - 600,
    )
    assert not storage.can_refresh()
