"""
settings.py

This module provides application configuration management for the mut
placeholder expansion.

Features:
- Centralized application configuration using Pydantic settings
- Optional JSON config file overlay located with appdirs
- Shared rich console for command line output

Usage:
Import appsettings for application configuration values.
"""

import json
from pathlib import Path
from typing import Any, Final, Optional
from appdirs import user_config_dir
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from mut.lib.log import LOG

# Console instance for rich output
console: Final[Console] = Console()

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("mut", ""))
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"

UNSUPPORTED_MESSAGE: Final[str] = "The parameter you entered does not exist."


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with MUT_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        fallbackTime: Time of day used when a time string cannot be parsed
        colorMarker: Replacement for '&' after interpolation
        unsupportedMessage: Reply for unknown selectors or missing arguments
        identifier: Prefix the expansion answers to (e.g. %mut_getTheWeek%)
        nullText: Reply for absent date records
    """

    beQuiet: bool = False
    fallbackTime: str = "23:59:59"
    colorMarker: str = "§"
    unsupportedMessage: str = UNSUPPORTED_MESSAGE
    identifier: str = "mut"
    nullText: str = "null"

    model_config = SettingsConfigDict(
        env_prefix="MUT_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


def problem_report(message: str, problems: Optional[list[str]]) -> None:
    """Log `message`, or hold it in `problems` when logging must wait."""
    if problems is None:
        LOG(message)
    else:
        problems.append(message)


def config_read(path: Path, problems: Optional[list[str]] = None) -> dict[str, Any]:
    """
    Read a JSON config file into a dictionary.

    A missing, unreadable or malformed file yields an empty dictionary so that
    defaults and environment values still apply.

    Args:
        path: Location of the config file
        problems: Collects messages instead of logging them

    Returns:
        dict: Parsed settings values
    """
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data: Any = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        problem_report(f"Could not read config file {path}: {e}", problems)
        return {}
    if not isinstance(data, dict):
        problem_report(f"Config file {path} does not hold a JSON object", problems)
        return {}
    return data


def config_load(path: Path = CONFIG_FILE, problems: Optional[list[str]] = None) -> App:
    """
    Build settings from defaults, environment and an optional config file.

    Values in the file take precedence over environment variables.

    Args:
        path: Location of the config file
        problems: Collects messages instead of logging them

    Returns:
        App: The resulting settings
    """
    overrides: dict[str, Any] = config_read(path, problems)
    try:
        return App(**overrides)
    except ValidationError as e:
        problem_report(f"Ignoring invalid config file {path}: {e}", problems)
        return App()


# Create the application settings instance. LOG reads appsettings, so
# problems met while building it are logged once it exists.
_load_problems: list[str] = []
appsettings: Final[App] = config_load(problems=_load_problems)
for _problem in _load_problems:
    LOG(_problem)
