# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Configuration management for awsssohelper.

Defaults live in ``~/.awsssohelper/config.json``. Commands load them through
``get_config_manager()`` and apply their own option overrides on top. The SSO
region is resolved once per invocation and passed explicitly to the service
layer instead of being stored as process-wide default state.
"""

from pathlib import Path
from typing import Optional

import boto3
from pydantic import BaseModel, Field, ValidationError

from awsssohelper.errors import ConfigurationError
from awsssohelper.ui import render_status

DEFAULT_CACHE_PATH = Path.home() / ".awsssohelper"
CONFIG_FILE_NAME = "config.json"


class HelperConfig(BaseModel):
    """Persisted defaults for the credentials command."""

    start_url: Optional[str] = Field(default=None, description="SSO portal start URL")
    region: Optional[str] = Field(default=None, description="SSO region")
    client_name: str = Field(default="default", description="OIDC client name and cache file name")
    client_type: str = Field(default="public", description="OIDC client type")
    timeout_seconds: int = Field(default=120, gt=0, description="Device flow poll timeout")
    poll_interval_seconds: int = Field(default=5, gt=0, description="Wait between token polls")
    cache_path: Path = Field(default=DEFAULT_CACHE_PATH, description="Directory holding cached tokens")


class ConfigManager:
    """Loads and saves HelperConfig as JSON in a config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CACHE_PATH
        self.config_file = self.config_dir / CONFIG_FILE_NAME
        self._config: Optional[HelperConfig] = None

    def load(self) -> HelperConfig:
        """Load the configuration, falling back to defaults.

        A missing file yields defaults silently; an unreadable or invalid
        file yields defaults with a warning.
        """
        if not self.config_file.exists():
            self._config = HelperConfig()
            return self._config

        try:
            self._config = HelperConfig.model_validate_json(self.config_file.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            render_status(f"Ignoring invalid config file {self.config_file}: {e}", level="warning")
            self._config = HelperConfig()
        return self._config

    def save(self, config: Optional[HelperConfig] = None) -> Path:
        """Write the configuration, creating the config directory if needed."""
        if config is not None:
            self._config = config
        if self._config is None:
            self._config = HelperConfig()

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(self._config.model_dump_json(indent=2), encoding="utf-8")
        return self.config_file


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Return the process-wide ConfigManager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def resolve_region(explicit: Optional[str], config: HelperConfig) -> str:
    """Pick the SSO region for this invocation.

    Args:
        explicit: Region given on the command line
        config: Loaded configuration

    Returns:
        The explicit region, else the configured one, else the ambient boto3 default

    Raises:
        ConfigurationError: If no region is available from any source
    """
    region = explicit or config.region or boto3.Session().region_name
    if not region:
        raise ConfigurationError(
            "No AWS region configured.",
            hint="Pass --region, run 'awsssohelper config set --region <region>' or set AWS_REGION.",
        )
    return region


def resolve_start_url(explicit: Optional[str], config: HelperConfig) -> str:
    """Pick the SSO start URL, raising ConfigurationError when none is set."""
    start_url = explicit or config.start_url
    if not start_url:
        raise ConfigurationError(
            "No SSO start URL configured.",
            hint="Pass --start-url or run 'awsssohelper config set --start-url <url>'.",
        )
    return start_url
