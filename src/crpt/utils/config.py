"""
Client Configuration Loader
Loads endpoint, rate-limit and logging settings from configs/crpt.yaml

Environment variables (optionally from a .env file) override the YAML values:
    CRPT_BASE_URL       -> client.base_url
    CRPT_REQUEST_LIMIT  -> rate_limit.request_limit
"""
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from crpt.exceptions import ConfigurationError

load_dotenv()

DEFAULT_BASE_URL = 'https://ismp.crpt.ru/api/v3'

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'client': {
        'base_url': DEFAULT_BASE_URL,
        'connect_timeout': 5.0,
        'read_timeout': 30.0,
    },
    'rate_limit': {
        'time_unit': 'second',
        'request_limit': 10,
    },
    'logging': {
        'log_dir': 'data/logs/crpt',
        'level': 'INFO',
        'console_output': False,
    },
}


class ClientConfig:

    def __init__(self, config_path: str = "configs/crpt.yaml"):
        """
        Initialize the config loader.

        A missing file is not an error: built-in defaults are used instead.

        :param config_path: Path to crpt.yaml
        """
        self.config_path = Path(config_path)
        self._config = None

    def load(self):
        """Load configuration from crpt.yaml, merged over the defaults"""
        merged = {section: dict(values) for section, values in DEFAULTS.items()}
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ConfigurationError(f"{self.config_path} must contain a mapping")
            for section, values in loaded.items():
                if not isinstance(values, dict):
                    raise ConfigurationError(f"Section '{section}' in {self.config_path} must be a mapping")
                merged.setdefault(section, {}).update(values)
        self._config = merged

    def _section(self, name: str) -> Dict[str, Any]:
        if self._config is None:
            self.load()
        return self._config.get(name, {})

    @property
    def client(self) -> Dict[str, Any]:
        """Get HTTP client config"""
        return self._section('client')

    @property
    def rate_limit(self) -> Dict[str, Any]:
        """Get rate limit config"""
        return self._section('rate_limit')

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging config"""
        return self._section('logging')

    @property
    def base_url(self) -> str:
        """Get API base URL from environment or config"""
        return os.getenv('CRPT_BASE_URL') or self.client['base_url']

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) timeout pair for requests"""
        return float(self.client['connect_timeout']), float(self.client['read_timeout'])

    @property
    def time_unit(self) -> str:
        return str(self.rate_limit['time_unit'])

    @property
    def request_limit(self) -> int:
        """Get request limit from environment or config"""
        raw = os.getenv('CRPT_REQUEST_LIMIT') or self.rate_limit['request_limit']
        try:
            return int(raw)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"request_limit must be an integer, got {raw!r}") from e
