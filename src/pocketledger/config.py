"""
Configuration module for pocketledger.

Contains constants, settings, and configuration values used throughout the application.
"""

import logging
import os
from decimal import Decimal
from pathlib import Path

# Version
VERSION = "0.1.0"

# Database configuration
DB_PATH_ENV_VAR = "POCKETLEDGER_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".pocketledger"
DEFAULT_DB_NAME = "pocketledger.db"

# Amounts are stored with two fractional digits
AMOUNT_QUANTUM = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest magnitude a Numeric(14, 2) column holds exactly
MAX_AMOUNT = Decimal("999999999999.99")

# Backup configuration
BACKUP_FORMAT_VERSION = "1"

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


def get_log_level(level_name: str | None = None) -> int:
    """Get the configured log level."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get((level_name or LOG_LEVEL).upper(), logging.WARNING)


def configure_logging(level_name: str | None = None) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(level=get_log_level(level_name), format=LOG_FORMAT)
