#!/usr/bin/env python3
"""
Logging configuration for scripts built on the Wikia client.

Every client logs under the "wikia" logger tree ("wikia.starwars",
"wikia.cross-wiki", ...). setup_logging attaches a rotating file handler
and an optional console handler to that tree, so request and failure
records from any client end up in the same place as the script's own
progress output without passing loggers around.

Usage:
    from wikia.client import Wikia
    from wikia.logging_config import setup_logging

    logger = setup_logging("dump", wiki="starwars", log_dir="./logs")
    api = Wikia(wiki="starwars")   # logs to ./logs/starwars-dump.log too
    logger.info("Starting dump...")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "wikia"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def client_logger_name(wiki: Optional[str]) -> str:
    """Name of the logger a client for the given wiki writes to."""
    return f"{ROOT_LOGGER}.{wiki or 'cross-wiki'}"


def setup_logging(
    name: str,
    wiki: Optional[str] = None,
    log_dir: Union[str, Path] = "./logs",
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    console: bool = True,
) -> logging.Logger:
    """
    Route the "wikia" logger tree to a rotating file and the console.

    Args:
        name: Script name, used for the returned logger and the log filename
        wiki: Wiki selector for the log filename (e.g., "starwars")
        log_dir: Directory for log files, created if missing
        level: Level for the whole tree; DEBUG also logs every request
        max_bytes: Max log file size before rotation
        backup_count: Number of rotated log files to keep
        console: Whether to also log to stdout

    Returns:
        The script's logger, "wikia.<name>"

    Log files are named {wiki}-{name}.log, or {name}.log for cross-wiki
    scripts. Calling this again replaces the handlers it installed.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / (f"{wiki}-{name}.log" if wiki else f"{name}.log")

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    logger = root.getChild(name)
    logger.info(f"Logging initialized: {log_file}")
    return logger
