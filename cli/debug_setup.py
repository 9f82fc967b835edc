"""Logging setup for CLI"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

import settings


def setup_logging(debug: bool, console: Optional[Console] = None, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger for a CLI run

    Args:
        debug: Whether debug mode is enabled
        console: Rich console the log records are rendered on
        log_file: Optional path to append plain-text log records to
    """
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(console=console, show_path=debug, rich_tracebacks=debug)
    rich_handler.setLevel(level)
    root_logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
