"""Configuration management for the uploader CLI."""

import json
import os
from pathlib import Path
from typing import Optional

from common.constants import DEFAULT_CONCURRENT_UPLOADS, DEFAULT_EXPIRY, DEFAULT_TIMEOUT_SECONDS
from uploader.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path('appsettings.json')

# appsettings.json sections understood in addition to the flat keys
SECTION_KEYS = {
    'ApiSettings': {'BaseUrl': 'base_url', 'ApiKey': 'api_key'},
    'UploadSettings': {'ConcurrentUploads': 'concurrent_uploads'},
}


class Config:
    """Loads uploader settings from a JSON file with environment overrides."""

    DEFAULT_CONFIG = {
        "base_url": "",
        "api_key": "",
        "concurrent_uploads": DEFAULT_CONCURRENT_UPLOADS,
        "timeout": DEFAULT_TIMEOUT_SECONDS,
        "expiry": DEFAULT_EXPIRY,
        "pause_on_exit": False,
        "log_level": None,
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to the JSON settings file. Defaults to
                FILESHARER_CONFIG or ./appsettings.json. A missing file is not an error.
        """
        if config_path is None:
            config_path = Path(os.environ.get('FILESHARER_CONFIG', DEFAULT_CONFIG_PATH))
        self.config_path = Path(config_path)
        self.data = self._load()

    def _load(self) -> dict:
        """
        Merge defaults, file values and environment variables (in that order).

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If the file exists but is not valid JSON
        """
        config = self.DEFAULT_CONFIG.copy()

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                raise ConfigError(f"Cannot read config file {self.config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {self.config_path} must contain a JSON object")
            config.update(_flatten_sections(data))

        if os.environ.get('FILESHARER_BASE_URL'):
            config['base_url'] = os.environ['FILESHARER_BASE_URL']
        if os.environ.get('FILESHARER_API_KEY'):
            config['api_key'] = os.environ['FILESHARER_API_KEY']

        return config

    def validate(self) -> None:
        """
        Check that the values required for an upload are present and sane.

        Raises:
            ConfigError: On missing base URL or API key, or invalid numbers
        """
        if not self.get_base_url():
            raise ConfigError("base_url is missing. Set it in the config file or FILESHARER_BASE_URL.")
        if not self.get_api_key():
            raise ConfigError("api_key is missing. Set it in the config file or FILESHARER_API_KEY.")

        concurrent = self.data.get('concurrent_uploads')
        if isinstance(concurrent, bool) or not isinstance(concurrent, int) or concurrent < 1:
            raise ConfigError(f"concurrent_uploads must be an integer >= 1, got {concurrent!r}")

        timeout = self.data.get('timeout')
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"timeout must be a positive number, got {timeout!r}")

    def get_base_url(self) -> str:
        """
        Get API base URL without trailing slashes.

        Returns:
            Base URL string (e.g., "https://share.example.com")
        """
        return (self.data.get('base_url') or '').strip().rstrip('/')

    def get_api_key(self) -> str:
        """Get the bearer token for the upload API."""
        return self.data.get('api_key') or ''

    def get_concurrent_uploads(self) -> int:
        return self.data.get('concurrent_uploads', DEFAULT_CONCURRENT_UPLOADS)

    def get_timeout(self) -> float:
        """
        Get per-request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', DEFAULT_TIMEOUT_SECONDS)

    def get_expiry(self) -> str:
        return self.data.get('expiry') or DEFAULT_EXPIRY

    def get_log_level(self) -> Optional[str]:
        return self.data.get('log_level')

    def pause_on_exit(self) -> bool:
        return bool(self.data.get('pause_on_exit'))


def _flatten_sections(data: dict) -> dict:
    """Map ApiSettings/UploadSettings sections onto flat config keys."""
    flat = {k: v for k, v in data.items() if k not in SECTION_KEYS}
    for section, keys in SECTION_KEYS.items():
        values = data.get(section)
        if not isinstance(values, dict):
            continue
        for source_key, target_key in keys.items():
            if source_key in values:
                flat[target_key] = values[source_key]
    return flat
