"""Unit tests for templated configuration loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.authbridge.runtime.config.config_data import ConfigData
from src.authbridge.runtime.config.config_template import (
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)

_CONFIG_YAML = """
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
  database:
    url: ${DATABASE_URL:-sqlite:///./authbridge.db}
  tenancy:
    namespace_key: ${NAMESPACE_KEY:-default}
  credentials:
    require_enabled: ${REQUIRE_ENABLED:-true}
"""


class TestSubstituteEnvVars:
    """Placeholder substitution."""

    def test_present_variable(self):
        with patch.dict(os.environ, {"NAMESPACE_KEY": "ofbiz#acme"}):
            assert substitute_env_vars("key=${NAMESPACE_KEY}") == "key=ofbiz#acme"

    def test_default_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${NAMESPACE_KEY:-default}") == "default"

    def test_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${NAMESPACE_KEY:-}") == ""

    def test_required_variable_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="Required environment variable DATABASE_URL not set"):
                substitute_env_vars("${DATABASE_URL}")

    def test_required_variable_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DATABASE_URL: point at the party store"):
                substitute_env_vars("${DATABASE_URL:?point at the party store}")

    def test_plain_text_unchanged(self):
        text = "no $PLACEHOLDERS or ${UNCLOSED here"
        assert substitute_env_vars(text) == text


class TestLoadTemplatedYaml:
    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(_CONFIG_YAML)
        return path

    def test_defaults(self, config_file: Path):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(config_file)

        assert config.tenancy.namespace_key == "default"
        assert config.database.is_sqlite is True
        assert config.credentials.require_enabled is True

    def test_environment_values(self, config_file: Path):
        env = {
            "NAMESPACE_KEY": "ofbiz#globex",
            "DATABASE_URL": "postgresql://u:p@db/ofbiz",
            "REQUIRE_ENABLED": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.tenancy.namespace_key == "ofbiz#globex"
        assert config.database.is_sqlite is False
        assert config.credentials.require_enabled is False

    def test_environment_prefixed_override(self, config_file: Path):
        env = {
            "APP_ENVIRONMENT": "production",
            "NAMESPACE_KEY": "ofbiz#dev",
            "PRODUCTION_NAMESPACE_KEY": "ofbiz#prod",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.app.environment == "production"
        assert config.tenancy.namespace_key == "ofbiz#prod"

    def test_invalid_configuration(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  app:\n    environment: staging\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)

    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.yaml")

        assert config == ConfigData()
