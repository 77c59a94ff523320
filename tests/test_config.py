"""
Tests for configuration management.
"""

import pytest
from pydantic import ValidationError

from sovcheck.config import Settings, get_settings
from sovcheck.models import NetworkType


def test_default_settings(monkeypatch):
    monkeypatch.delenv("SOVCHECK_NETWORK", raising=False)
    settings = Settings()
    assert settings.network == NetworkType.TESTNET
    assert settings.fee_fallback == 2
    assert settings.fee_low == 2
    assert settings.fee_target_blocks == 6
    assert settings.node_only is False
    assert settings.lnd_enabled is False
    assert settings.http_port == 8080


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SOVCHECK_NETWORK", "mainnet")
    monkeypatch.setenv("SOVCHECK_FEE_LOW", "4")
    monkeypatch.setenv("SOVCHECK_NODE_ONLY", "true")

    settings = Settings()
    assert settings.network == NetworkType.MAINNET
    assert settings.fee_low == 4
    assert settings.node_only is True


def test_get_settings_ignores_unset_overrides(monkeypatch):
    monkeypatch.setenv("SOVCHECK_FEE_FALLBACK", "9")

    settings = get_settings(fee_fallback=None, fee_low=3, network="signet")
    assert settings.fee_fallback == 9
    assert settings.fee_low == 3
    assert settings.network == NetworkType.SIGNET


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(fee_fallback=-1)
    with pytest.raises(ValidationError):
        Settings(network="regtest")
    with pytest.raises(ValidationError):
        Settings(http_port=70000)


def test_http_client_config():
    settings = Settings(tor_socks5_addr="127.0.0.1:9050", insecure_tls=True, http_timeout=5)
    config = settings.http_client_config()
    assert config.tor_socks5_addr == "127.0.0.1:9050"
    assert config.insecure_tls is True
    assert config.timeout == 5

    assert Settings(tor_socks5_addr="").http_client_config().tor_socks5_addr is None


def test_lnd_configured():
    assert not Settings(lnd_enabled=False, macaroon_path="/m").lnd_configured()
    assert not Settings(lnd_enabled=True).lnd_configured()
    assert Settings(lnd_enabled=True, macaroon_path="/m").lnd_configured()
