# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load configuration from environment variables / .env file
#   and provide a typed config object to the dispatcher, the
#   operations and the CLI.
#
# CLASSES:
# --------
# - AppConfig (dataclass)
#     file_mode: int        (default 0o644)  USER_STORE_FILE_MODE (octal)
#     encoding: str         (default "utf-8") USER_STORE_ENCODING (codec name)
#     strict_items: bool    (default False)  USER_STORE_STRICT_ITEMS
#     log_level: str        (default "WARNING") USER_STORE_LOG_LEVEL
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton so the next get_config() re-reads the
#     environment.
#
# USAGE:
# ------
#   from user_store.config import get_config
#   config = get_config()
#   print(config.file_mode)
#
# ==============================================

import codecs
import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_FILE_MODE = 0o644


@dataclass
class AppConfig:
    """Main application configuration."""
    file_mode: int = DEFAULT_FILE_MODE
    encoding: str = "utf-8"
    strict_items: bool = False
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_file_mode(value: Optional[str], default: int = DEFAULT_FILE_MODE) -> int:
    if not value:
        return default
    try:
        return int(value, 8)
    except ValueError:
        return default


def _parse_encoding(value: Optional[str], default: str = "utf-8") -> str:
    if not value:
        return default
    try:
        return codecs.lookup(value).name
    except LookupError:
        return default


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    _config_instance = AppConfig(
        file_mode=_parse_file_mode(os.getenv("USER_STORE_FILE_MODE")),
        encoding=_parse_encoding(os.getenv("USER_STORE_ENCODING")),
        strict_items=_parse_bool(os.getenv("USER_STORE_STRICT_ITEMS")),
        log_level=os.getenv("USER_STORE_LOG_LEVEL", "WARNING").upper(),
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration."""
    global _config_instance
    _config_instance = None
