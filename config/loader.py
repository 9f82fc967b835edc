"""Configuration loader for the Neonomics client

Values are resolved in this order:
1. Process environment
2. The .env file (NEO_ENV_FILE, or .env in the working directory)
3. Defaults given by the caller
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Set
from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes', 'on')


class ConfigLoader:
    """Reads NEO_* settings from the environment and a .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """
        Args:
            env_path: Path of the .env file (default: $NEO_ENV_FILE or ./.env)
        """
        self.env_path = Path(env_path or os.getenv("NEO_ENV_FILE") or ".env")
        self.file_values: Dict[str, Optional[str]] = {}
        # Keys whose value was supplied by the file, not the real environment
        self.file_keys: Set[str] = set()
        if self.env_path.is_file():
            self.file_values = dotenv_values(self.env_path)
            self.file_keys = {key for key in self.file_values if key not in os.environ}
            # Never clobber the real environment
            load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Read {len(self.file_values)} value(s) from {self.env_path}")
        else:
            logger.debug(f"No env file at {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Return ``env_var`` coerced to the type of ``default``

        Unparseable numbers fall back to the default with a warning.
        """
        raw = os.getenv(env_var)
        if raw is None:
            if isinstance(default, str) and default.startswith("~/"):
                return str(Path(default).expanduser())
            return default
        return self._coerce(env_var, raw, default)

    @staticmethod
    def _coerce(env_var: str, raw: str, default: Any) -> Any:
        # bool first: bool is a subclass of int
        if isinstance(default, bool):
            return raw.strip().lower() in _TRUE_VALUES
        for kind in (int, float):
            if isinstance(default, kind):
                try:
                    return kind(raw)
                except ValueError:
                    logger.warning(f"{env_var}={raw!r} is not a valid {kind.__name__}, using {default}")
                    return default
        return raw

    def source_of(self, env_var: str) -> str:
        """Where the value of ``env_var`` comes from: env, file or default"""
        if os.getenv(env_var) is None:
            return "default"
        return "file" if env_var in self.file_keys else "env"


_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get or create the process-wide ConfigLoader"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
