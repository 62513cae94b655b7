"""Resolution of the effective config for each scan target."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Optional, Union

from osv_policy.config.defaults import get_default_config
from osv_policy.config.loader import load_config_file, normalize_config_load_path
from osv_policy.exceptions import ConfigurationError, DiscoveryError
from osv_policy.models.config import Config
from osv_policy.reporter import ConsoleReporter, Reporter

ConfigLoader = Callable[[Path], Config]


class ConfigManager:
    """Decide which config applies to a target.

    Precedence is override, then the ``osv-scanner.toml`` next to the
    target, then the default config. Resolved locations are cached for the
    lifetime of the manager, including locations that fell back to the
    default. The cache is never invalidated.
    """

    def __init__(
        self,
        default_config: Optional[Config] = None,
        reporter: Optional[Reporter] = None,
        loader: ConfigLoader = load_config_file,
    ) -> None:
        """Initialize the manager with an empty cache.

        Args:
            default_config: Config used when no file is found alongside a
                target. Defaults to an empty config.
            reporter: Receives a line for every config loaded from disk.
            loader: Loads and validates a config file, raising
                ConfigurationError on failure.
        """
        self.default_config = (
            default_config if default_config is not None else get_default_config()
        )
        self.override_config: Optional[Config] = None
        self._reporter = reporter if reporter is not None else ConsoleReporter()
        self._loader = loader
        self._configs: dict[Path, Config] = {}
        self._lock = threading.Lock()

    def set_override(self, config_path: Union[str, Path]) -> None:
        """Load the config at ``config_path`` and use it for every target.

        Args:
            config_path: Path of the override config file.

        Raises:
            ConfigurationError: If loading fails. The previous state is kept.
        """
        config = self._loader(Path(config_path))
        self.override_config = config.with_load_path(str(config_path))

    def get(self, target_path: Union[str, Path]) -> Config:
        """Get the config that applies to ``target_path``.

        Args:
            target_path: File or directory being scanned.

        Returns:
            The override config if set, else the cached or freshly loaded
            config for the target's directory, else the default config.
        """
        if self.override_config is not None:
            return self.override_config

        try:
            config_path = normalize_config_load_path(target_path)
        except DiscoveryError:
            # TODO: targets that are not files (container images, git commits)
            # never get a config; they need their own discovery strategy.
            return self.default_config

        with self._lock:
            cached = self._configs.get(config_path)
        if cached is not None:
            return cached

        try:
            config = self._loader(config_path).with_load_path(str(config_path))
        except ConfigurationError:
            config = self.default_config
        else:
            self._reporter.infof(f"Loaded filter from: {config.load_path}")

        with self._lock:
            return self._configs.setdefault(config_path, config)

    @property
    def cached_paths(self) -> list[Path]:
        """Config locations resolved so far, in resolution order."""
        with self._lock:
            return list(self._configs)
