"""Tests for ledger configuration.

These tests cover:
1. Default values
2. Environment variable loading
3. Field validation
4. The configuration singleton
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from lending_ledger.config import LedgerConfig, get_config, reset_config


class TestLedgerConfig:
    """Test ledger configuration behavior."""

    def test_default_configuration(self, clean_env):
        """Defaults give an in-memory ledger with hashed identifiers."""
        config = LedgerConfig(_env_file=None)

        assert config.server_name == "lending-ledger"
        assert config.server_version == "0.1.0"
        assert config.transport == "stdio"
        assert config.http_host == "127.0.0.1"
        assert config.http_port == 8080
        assert config.admin_principal == "admin"
        assert config.identifier_scheme == "hashed"
        assert config.lock_scope == "item"
        assert config.journal_enabled is False
        assert config.logfire_enabled is False
        assert config.logfire_token is None
        assert config.database_path == Path("data/ledger_events.db").absolute()

    def test_environment_variable_loading(self, clean_env):
        """Settings come from LENDING_LEDGER_* variables."""
        env_vars = {
            "LENDING_LEDGER_ADMIN_PRINCIPAL": "curator",
            "LENDING_LEDGER_IDENTIFIER_SCHEME": "concat",
            "LENDING_LEDGER_LOCK_SCOPE": "global",
            "LENDING_LEDGER_JOURNAL_ENABLED": "true",
            "LENDING_LEDGER_DATABASE_PATH": "/tmp/ledger-test.db",
            "LENDING_LEDGER_LOGFIRE_TOKEN": "secret-token",
            "LENDING_LEDGER_TRANSPORT": "streamable_http",
            "LENDING_LEDGER_HTTP_PORT": "9090",
        }

        with patch.dict(os.environ, env_vars):
            config = LedgerConfig(_env_file=None)

            assert config.admin_principal == "curator"
            assert config.identifier_scheme == "concat"
            assert config.lock_scope == "global"
            assert config.journal_enabled is True
            assert config.database_path == Path("/tmp/ledger-test.db")
            assert config.logfire_token == "secret-token"
            assert config.transport == "streamable_http"
            assert config.http_port == 9090

    def test_token_hidden_from_repr(self):
        config = LedgerConfig(_env_file=None, logfire_token="secret-token")
        assert "secret-token" not in repr(config)

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("identifier_scheme", "md5"),
            ("lock_scope", "table"),
            ("transport", "websocket"),
            ("http_port", 80),
            ("http_port", 70000),
            ("log_level", "TRACE"),
            ("server_name", "Ledger Server"),
            ("server_name", "ab"),
            ("server_version", "v1.0"),
            ("admin_principal", ""),
            ("admin_principal", "   "),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            LedgerConfig(_env_file=None, **{field: value})

    def test_database_url(self, tmp_path):
        config = LedgerConfig(_env_file=None, database_path=tmp_path / "events.db")
        assert config.get_database_url() == f"sqlite:///{tmp_path / 'events.db'}"

    def test_server_info(self, test_config):
        assert test_config.server_info == {
            "name": "test-lending-ledger",
            "version": "0.0.1-test",
            "transport": "stdio",
        }
        assert test_config.is_development is True


class TestConfigSingleton:
    """get_config returns one shared instance until reset."""

    def test_singleton(self, clean_env):
        reset_config()
        try:
            assert get_config() is get_config()
        finally:
            reset_config()

    def test_reset(self, clean_env):
        reset_config()
        try:
            first = get_config()
            reset_config()
            assert get_config() is not first
        finally:
            reset_config()
