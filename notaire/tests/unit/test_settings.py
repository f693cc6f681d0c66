"""
Unit tests for settings loading.

Usage:
    pytest notaire/tests/unit/test_settings.py
"""

import pytest
from pydantic import ValidationError

from notaire.config.settings import Settings, load_config


class TestLoadConfig:
    """Tests for YAML and environment layering."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for key in ("ENV", "DATABASE_URL", "IPFS_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)

    def test_test_profile(self):
        settings = load_config(env="test")

        assert settings.DATABASE_URL == "sqlite+aiosqlite:///:memory:"
        assert settings.IPFS_ENABLED is False
        assert settings.IPFS_TIMEOUT == 2.0

    def test_environment_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("IPFS_TIMEOUT", "7.5")

        settings = load_config(env="test")

        assert settings.IPFS_TIMEOUT == 7.5


class TestSettings:
    """Tests for derived settings and validation."""

    def test_backends_disabled_without_configuration(self):
        settings = Settings(
            CHAIN_RPC_URL=None,
            NFT_CONTRACT_ADDRESS=None,
            CHAIN_OPERATOR_ADDRESS=None,
            TWILIO_ACCOUNT_SID=None,
            TWILIO_AUTH_TOKEN=None,
            TWILIO_FROM_NUMBER=None,
        )

        assert settings.chain_enabled is False
        assert settings.twilio_enabled is False

    def test_chain_needs_every_setting(self):
        settings = Settings(
            CHAIN_RPC_URL="http://chain.test",
            NFT_CONTRACT_ADDRESS="0x5FbDB2315678afecb367f032d93F642f64180aa3",
            CHAIN_OPERATOR_ADDRESS=None,
        )

        assert settings.chain_enabled is False

    def test_log_level_normalized(self):
        assert Settings(LOG_LEVEL="warning").LOG_LEVEL == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")

    def test_invalid_country_code(self):
        with pytest.raises(ValidationError):
            Settings(DEFAULT_COUNTRY_CODE="91")
