"""
Unit tests for utils.config.ClientConfig
"""
import pytest
from unittest.mock import patch

from crpt.exceptions import ConfigurationError
from crpt.utils.config import DEFAULT_BASE_URL, ClientConfig


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "crpt.yaml"
    path.write_text(
        "client:\n"
        "  base_url: https://markirovka.sandbox.crptech.ru/api/v3\n"
        "  read_timeout: 12\n"
        "rate_limit:\n"
        "  time_unit: minute\n"
        "  request_limit: 100\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    return path


class TestClientConfig:
    """Test ClientConfig loading and overrides"""

    @patch.dict('os.environ', {}, clear=True)
    def test_missing_file_uses_defaults(self, tmp_path):
        config = ClientConfig(str(tmp_path / "absent.yaml"))

        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == (5.0, 30.0)
        assert config.time_unit == 'second'
        assert config.request_limit == 10
        assert config.logging['level'] == 'INFO'

    @patch.dict('os.environ', {}, clear=True)
    def test_file_values_merge_over_defaults(self, config_file):
        config = ClientConfig(str(config_file))

        assert config.base_url == 'https://markirovka.sandbox.crptech.ru/api/v3'
        # connect_timeout not in file -> default kept
        assert config.timeout == (5.0, 12.0)
        assert config.time_unit == 'minute'
        assert config.request_limit == 100
        assert config.logging['level'] == 'DEBUG'
        assert config.logging['log_dir'] == 'data/logs/crpt'

    @patch.dict('os.environ', {'CRPT_BASE_URL': 'http://localhost:8080', 'CRPT_REQUEST_LIMIT': '3'})
    def test_env_overrides(self, config_file):
        config = ClientConfig(str(config_file))

        assert config.base_url == 'http://localhost:8080'
        assert config.request_limit == 3

    @patch.dict('os.environ', {'CRPT_REQUEST_LIMIT': 'many'})
    def test_invalid_request_limit(self, tmp_path):
        config = ClientConfig(str(tmp_path / "absent.yaml"))

        with pytest.raises(ConfigurationError, match="request_limit"):
            _ = config.request_limit

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "crpt.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ClientConfig(str(path)).load()

    def test_non_mapping_section(self, tmp_path):
        path = tmp_path / "crpt.yaml"
        path.write_text("client: nope\n")

        with pytest.raises(ConfigurationError, match="client"):
            ClientConfig(str(path)).load()

    def test_lazy_load(self, config_file):
        config = ClientConfig(str(config_file))
        assert config._config is None
        _ = config.rate_limit
        assert config._config is not None
