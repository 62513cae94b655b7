"""Configuration handling for osv-policy."""
from __future__ import annotations

from osv_policy.config.defaults import get_default_config
from osv_policy.config.loader import load_config_file, normalize_config_load_path
from osv_policy.config.manager import ConfigManager
from osv_policy.constants import CONFIG_FILE_NAME
from osv_policy.models.config import Config

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigManager",
    "get_default_config",
    "load_config_file",
    "normalize_config_load_path",
]
