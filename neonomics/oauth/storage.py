"""On-disk persistence of the client's token pair"""

import logging
import os
import platform
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from settings import TOKEN_FILE
from .models import TokenPair

logger = logging.getLogger(__name__)

# Treat tokens this close to expiry as expired
EXPIRY_MARGIN_SECONDS = 5


class StoredToken(BaseModel):
    """File format: the token pair and the Unix time it was obtained"""
    token: TokenPair
    obtained_at: int

    @property
    def expires_at(self) -> int:
        return self.obtained_at + self.token.expires_in

    @property
    def refresh_expires_at(self) -> Optional[int]:
        if not self.token.refresh_token or not self.token.refresh_expires_in:
            return None
        return self.obtained_at + self.token.refresh_expires_in


@dataclass
class TokenStatus:
    """Secret-free summary of the stored token"""
    has_tokens: bool = False
    is_expired: bool = True
    has_refresh_token: bool = False
    expires_at: Optional[datetime] = None
    # Seconds until expiry; negative once expired
    remaining: int = 0

    @property
    def time_until_expiry(self) -> str:
        if not self.has_tokens:
            return "No tokens"
        text = _duration(abs(self.remaining))
        return f"{text} ago" if self.remaining <= 0 else text


def _duration(seconds: int) -> str:
    hours, minutes = seconds // 3600, (seconds % 3600) // 60
    return f"{hours}h {minutes}m" if hours else f"{minutes}m"


class TokenStorage:
    """Token file readable by the current user only"""

    def __init__(self, token_file: Optional[str] = None):
        self.token_path = Path(token_file or TOKEN_FILE)
        parent = self.token_path.parent
        if not parent.exists():
            parent.mkdir(parents=True, exist_ok=True)
            if platform.system() != "Windows":
                os.chmod(parent, 0o700)

    @property
    def token_file(self) -> Path:
        return self.token_path

    def save_token(self, token: TokenPair, obtained_at: Optional[int] = None):
        """Write ``token``, stamped with ``obtained_at`` (default: now)"""
        stored = StoredToken(
            token=token,
            obtained_at=int(time.time()) if obtained_at is None else obtained_at,
        )
        self.token_path.write_text(stored.model_dump_json(indent=2))
        if platform.system() != "Windows":
            os.chmod(self.token_path, 0o600)
        logger.debug(f"Saved token to {self.token_path}")

    def _load(self) -> Optional[StoredToken]:
        if not self.token_path.exists():
            return None
        try:
            return StoredToken.model_validate_json(self.token_path.read_text())
        except (PydanticValidationError, OSError) as e:
            logger.warning(f"Ignoring unreadable token file {self.token_path}: {e}")
            return None

    def load_token(self) -> Optional[TokenPair]:
        stored = self._load()
        return stored.token if stored else None

    def clear_tokens(self):
        if self.token_path.exists():
            self.token_path.unlink()
            logger.info(f"Removed {self.token_path}")

    def expires_at(self) -> Optional[int]:
        """Unix time at which the stored access token expires"""
        stored = self._load()
        return stored.expires_at if stored else None

    def is_token_expired(self) -> bool:
        expires_at = self.expires_at()
        return expires_at is None or time.time() >= expires_at - EXPIRY_MARGIN_SECONDS

    def can_refresh(self) -> bool:
        """Whether the stored refresh token is present and not known to be expired"""
        stored = self._load()
        if stored is None or not stored.token.refresh_token:
            return False
        refresh_expires_at = stored.refresh_expires_at
        return refresh_expires_at is None or time.time() < refresh_expires_at - EXPIRY_MARGIN_SECONDS

    def get_status(self) -> TokenStatus:
        stored = self._load()
        if stored is None:
            return TokenStatus()

        remaining = stored.expires_at - int(time.time())
        return TokenStatus(
            has_tokens=True,
            is_expired=remaining <= EXPIRY_MARGIN_SECONDS,
            has_refresh_token=bool(stored.token.refresh_token),
            expires_at=datetime.fromtimestamp(stored.expires_at),
            remaining=remaining,
        )
