"""
Outbound HTTP transport shared by the blockchain backends.

When a Tor SOCKS5 address is configured every request to the explorer or
the node is routed through it. TLS verification can be turned off for
development against self-signed endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from loguru import logger

DEFAULT_HTTP_TIMEOUT = 15.0


@dataclass(frozen=True)
class HTTPClientConfig:
    timeout: float = DEFAULT_HTTP_TIMEOUT
    tor_socks5_addr: str | None = None  # e.g. 127.0.0.1:9050
    insecure_tls: bool = False  # dev only


def socks_proxy_url(tor_socks5_addr: str) -> str:
    if "://" in tor_socks5_addr:
        return tor_socks5_addr
    return f"socks5://{tor_socks5_addr}"


def build_http_client(
    config: HTTPClientConfig | None = None,
    auth: tuple[str, str] | None = None,
) -> httpx.AsyncClient:
    config = config or HTTPClientConfig()
    proxy = None
    if config.tor_socks5_addr:
        proxy = socks_proxy_url(config.tor_socks5_addr)
        logger.info(f"Routing outbound HTTP through SOCKS proxy: {proxy}")
    if config.insecure_tls:
        logger.warning("TLS verification disabled for outbound HTTP (dev only)")

    return httpx.AsyncClient(
        timeout=config.timeout,
        proxy=proxy,
        verify=not config.insecure_tls,
        auth=auth,
    )
