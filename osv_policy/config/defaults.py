"""Default configuration values for osv-policy."""

from __future__ import annotations

from osv_policy.models.config import Config


def get_default_config() -> Config:
    """Get the default configuration.

    Returns:
        Config with no rules and no load path.
    """
    return Config()
