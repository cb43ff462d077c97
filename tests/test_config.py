"""Tests for configuration loading."""

import pytest

from binelek_mcp.config import (
    DEFAULT_GATEWAY_URL,
    DEFAULT_TENANT_ID,
    DEFAULT_TIMEOUT_MS,
    LoggingConfig,
    load_config,
    substitute_variables,
)
from binelek_mcp.exceptions import ConfigurationError


class TestLoadConfig:
    """Test the defaults < YAML < environment layering."""

    def test_defaults(self, clean_env):
        config = load_config()

        assert config.gateway.base_url == DEFAULT_GATEWAY_URL
        assert config.gateway.tenant_id == DEFAULT_TENANT_ID
        assert config.gateway.auth_token is None
        assert config.gateway.timeout_ms == DEFAULT_TIMEOUT_MS
        assert config.logging.level == "INFO"
        assert config.server.name == "binelek-mcp-server"

    def test_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("BINELEK_GATEWAY_URL", "https://gateway.example.com")
        monkeypatch.setenv("BINELEK_TENANT_ID", "acme")
        monkeypatch.setenv("BINELEK_JWT_TOKEN", "abc.def.ghi")
        monkeypatch.setenv("BINELEK_TIMEOUT_MS", "5000")
        monkeypatch.setenv("BINELEK_LOG_LEVEL", "debug")

        config = load_config()

        assert config.gateway.base_url == "https://gateway.example.com"
        assert config.gateway.tenant_id == "acme"
        assert config.gateway.auth_token == "abc.def.ghi"
        assert config.gateway.timeout_seconds == 5.0
        assert config.logging.level == "DEBUG"

    def test_empty_token_means_no_token(self, clean_env, monkeypatch):
        monkeypatch.setenv("BINELEK_JWT_TOKEN", "")

        assert load_config().gateway.auth_token is None

    def test_yaml_file_with_templates(self, clean_env, monkeypatch):
        monkeypatch.setenv("STAGING_TOKEN", "from-template")
        path = clean_env / "staging.yaml"
        path.write_text(
            "gateway:\n"
            "  base_url: https://staging.binelek.test\n"
            "  tenant_id: staging\n"
            "  auth_token: '{STAGING_TOKEN}'\n"
            "logging:\n"
            "  format: json\n"
        )

        config = load_config(path)

        assert config.gateway.base_url == "https://staging.binelek.test"
        assert config.gateway.tenant_id == "staging"
        assert config.gateway.auth_token == "from-template"
        assert config.logging.format == "json"
        assert config.gateway.timeout_ms == DEFAULT_TIMEOUT_MS

    def test_default_file_in_working_directory(self, clean_env):
        (clean_env / "binelek.yaml").write_text("gateway:\n  tenant_id: local\n")

        config = load_config()

        assert config.gateway.tenant_id == "local"
        assert config.gateway.base_url == DEFAULT_GATEWAY_URL

    def test_config_file_from_environment(self, clean_env, monkeypatch):
        path = clean_env / "other.yaml"
        path.write_text("gateway:\n  tenant_id: other\n")
        monkeypatch.setenv("BINELEK_CONFIG_FILE", str(path))

        assert load_config().gateway.tenant_id == "other"

    def test_environment_beats_yaml(self, clean_env, monkeypatch):
        path = clean_env / "binelek.yaml"
        path.write_text("gateway:\n  tenant_id: from-yaml\n  base_url: http://yaml.test\n")
        monkeypatch.setenv("BINELEK_TENANT_ID", "from-env")

        config = load_config(path)

        assert config.gateway.tenant_id == "from-env"
        assert config.gateway.base_url == "http://yaml.test"

    def test_missing_explicit_file(self, clean_env):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(clean_env / "nope.yaml")

    def test_invalid_yaml(self, clean_env):
        path = clean_env / "broken.yaml"
        path.write_text("gateway: [unterminated\n")

        with pytest.raises(ConfigurationError, match="parse YAML"):
            load_config(path)

    def test_non_mapping_yaml(self, clean_env):
        path = clean_env / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_log_level(self, clean_env, monkeypatch):
        monkeypatch.setenv("BINELEK_LOG_LEVEL", "CHATTY")

        with pytest.raises(ConfigurationError):
            load_config()

    def test_blank_tenant_rejected(self, clean_env, monkeypatch):
        monkeypatch.setenv("BINELEK_TENANT_ID", "   ")

        with pytest.raises(ConfigurationError):
            load_config()

    def test_invalid_timeout(self, clean_env, monkeypatch):
        monkeypatch.setenv("BINELEK_TIMEOUT_MS", "soon")

        with pytest.raises(ConfigurationError):
            load_config()


class TestSubstituteVariables:
    """Test {VAR} template substitution."""

    def test_nested(self):
        data = {"a": "{HOST}:{PORT}", "b": ["{HOST}", 3], "c": None}

        result = substitute_variables(data, {"HOST": "gw", "PORT": 8092})

        assert result == {"a": "gw:8092", "b": ["gw", 3], "c": None}

    def test_unknown_variables_untouched(self):
        assert substitute_variables("{MISSING}/x", {}) == "{MISSING}/x"


class TestLoggingConfig:
    def test_level_is_normalized(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            LoggingConfig(format="xml")
