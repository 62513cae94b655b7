"""Configuration file discovery and loading for osv-policy."""
from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from osv_policy.constants import CONFIG_FILE_NAME
from osv_policy.exceptions import ConfigurationError, DiscoveryError
from osv_policy.models.config import Config


def normalize_config_load_path(target: Union[str, Path]) -> Path:
    """Find the config file location that applies to a scan target.

    Uses the target itself when it is a directory, otherwise its containing
    directory, and appends the well-known config file name. The config file
    does not have to exist.

    Args:
        target: File or directory being scanned.

    Returns:
        Path to where the target's config file would be.

    Raises:
        DiscoveryError: If the target cannot be stat'd.
    """
    try:
        target_stat = os.stat(target)
    except OSError as e:
        raise DiscoveryError(f"Failed to stat target '{target}': {e}") from e

    target_path = Path(target)

    if stat.S_ISDIR(target_stat.st_mode):
        containing_folder = target_path
    else:
        containing_folder = target_path.parent
    return containing_folder / CONFIG_FILE_NAME


def load_config_file(path: Union[str, Path]) -> Config:
    """Load and validate configuration from a TOML file.

    The returned config has ``load_path`` set to ``path``.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated Config instance.

    Raises:
        ConfigurationError: If the file does not exist, cannot be read,
            has invalid TOML, or fails Pydantic validation.
    """
    config_path = Path(path)
    try:
        content = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"No config file found on this path: {config_path}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{config_path}': {e}"
        ) from e

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Failed to parse config file '{config_path}': {e}"
        ) from e

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        error_messages = _format_validation_errors(e)
        raise ConfigurationError(
            f"Invalid configuration in '{config_path}': {error_messages}"
        ) from e

    return config.with_load_path(str(path))


def _format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        msg = err["msg"]
        messages.append(f"{loc}: {msg}")
    return "; ".join(messages)
