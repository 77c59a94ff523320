"""
Configuration management using pydantic-settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sovcheck.constants import (
    DEFAULT_FEE_FALLBACK,
    DEFAULT_FEE_LOW,
    DEFAULT_FEE_TARGET_BLOCKS,
)
from sovcheck.models import NetworkType
from sovcheck.network import DEFAULT_HTTP_TIMEOUT, HTTPClientConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="SOVCHECK_", case_sensitive=False
    )

    network: NetworkType = NetworkType.TESTNET

    # Fees (sat/vB)
    fee_fallback: int = Field(default=DEFAULT_FEE_FALLBACK, ge=0)
    fee_low: int = Field(default=DEFAULT_FEE_LOW, ge=0)
    fee_target_blocks: int = Field(default=DEFAULT_FEE_TARGET_BLOCKS, ge=1)

    # Outbound HTTP
    tor_socks5_addr: str | None = None
    insecure_tls: bool = False
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)

    # Explorer
    explorer_url: str | None = None

    # Node-only mode (Bitcoin Core)
    node_only: bool = False
    rpc_url: str = "http://127.0.0.1:18332"
    rpc_user: str = ""
    rpc_password: str = ""

    # LND
    lnd_enabled: bool = False
    lnd_url: str = "https://127.0.0.1:8080"
    macaroon_path: str | None = None
    lnd_tls_insecure: bool = True

    # HTTP server
    http_host: str = "0.0.0.0"
    http_port: int = Field(default=8080, ge=1, le=65535)

    log_level: str = "INFO"

    def http_client_config(self) -> HTTPClientConfig:
        return HTTPClientConfig(
            timeout=self.http_timeout,
            tor_socks5_addr=self.tor_socks5_addr or None,
            insecure_tls=self.insecure_tls,
        )

    def lnd_configured(self) -> bool:
        return self.lnd_enabled and bool(self.macaroon_path) and bool(self.lnd_url)


def get_settings(**overrides: object) -> Settings:
    """Settings from env/.env with explicit (e.g. CLI) overrides applied on top."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
