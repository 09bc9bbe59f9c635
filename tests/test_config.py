"""Tests for configuration loading."""

import json

import pytest

from ingressgen.config import apply_overrides, load_config
from ingressgen.errors import ConfigDecodeError, ConfigError, ConfigReadError
from ingressgen.models import Configuration


@pytest.fixture
def write_config(tmp_path):
    """Write a configuration file and return its path."""
    def _write(content):
        path = tmp_path / "ingress-hosts.json"
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content)
        return path
    return _write


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_valid(self, write_config):
        """Test loading a valid configuration."""
        path = write_config({
            "name": "site",
            "namespace": "ns",
            "service-name": "svc",
            "service-port": 8080,
            "plain": ["a.com"],
            "tls-required": {"grp": ["b.com"]},
        })

        config = load_config(path)

        assert config.name == "site"
        assert config.namespace == "ns"
        assert config.service_port == 8080
        assert config.plain[0].host == "a.com"
        assert config.tls_required["grp"][0].host == "b.com"

    def test_load_accepts_str_path(self, write_config):
        """Test the path may be given as a string."""
        path = write_config({"name": "site"})

        assert load_config(str(path)).name == "site"

    def test_port_defaults_to_80(self, write_config):
        """Test a missing service port is defaulted."""
        path = write_config({"name": "site"})

        assert load_config(path).service_port == 80

    def test_missing_file(self, tmp_path):
        """Test an unreadable file raises ConfigReadError."""
        path = tmp_path / "missing.json"

        with pytest.raises(ConfigReadError) as exc_info:
            load_config(path)

        assert exc_info.value.path == str(path)
        assert "could not read config" in str(exc_info.value)

    def test_malformed_json(self, write_config):
        """Test malformed JSON raises ConfigDecodeError."""
        path = write_config("{not json")

        with pytest.raises(ConfigDecodeError, match="could not decode config"):
            load_config(path)

    def test_invalid_utf8(self, tmp_path):
        """Test a file that is not UTF-8 raises ConfigDecodeError."""
        path = tmp_path / "ingress-hosts.json"
        path.write_bytes(b'{"name": "\xff"}')

        with pytest.raises(ConfigDecodeError, match="could not decode config") as exc_info:
            load_config(path)

        assert exc_info.value.path == str(path)

    def test_unknown_host_shape(self, write_config):
        """Test an unrecognized host entry names its location."""
        path = write_config({"tls-optional": {"grp": [["a.com"]]}})

        with pytest.raises(ConfigDecodeError) as exc_info:
            load_config(path)

        message = str(exc_info.value)
        assert "tls-optional.grp.0" in message
        assert "unknown type for host entry" in message

    def test_wrong_top_level_type(self, write_config):
        """Test a JSON document that is not an object is rejected."""
        path = write_config(["a.com"])

        with pytest.raises(ConfigDecodeError):
            load_config(path)

    def test_errors_share_base_class(self, tmp_path):
        """Test loading errors derive from ConfigError."""
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.json")


class TestApplyOverrides:
    """Tests for apply_overrides."""

    @pytest.fixture
    def config(self):
        return Configuration.model_validate({
            "name": "site",
            "namespace": "ns",
            "ingress-class": "haproxy",
        })

    def test_overrides_replace_fields(self, config):
        """Test non-empty overrides replace the configured values."""
        result = apply_overrides(config, name="other", namespace="prod", ingress_class="nginx")

        assert result.name == "other"
        assert result.namespace == "prod"
        assert result.ingress_class == "nginx"

    def test_empty_overrides_ignored(self, config):
        """Test empty or missing overrides keep the configured values."""
        result = apply_overrides(config, name="", namespace=None)

        assert result.name == "site"
        assert result.namespace == "ns"
        assert result.ingress_class == "haproxy"

    def test_original_untouched(self, config):
        """Test overrides return a new configuration."""
        apply_overrides(config, name="other")

        assert config.name == "site"
