"""
Sovereignty checker CLI - score an address once, or serve the HTTP API.
"""

from __future__ import annotations

import asyncio
import json
import signal
import sys

import typer
from loguru import logger
from pydantic import ValidationError

from sovcheck.backends.base import BackendError
from sovcheck.config import Settings, get_settings
from sovcheck.models import Report
from sovcheck.server import SovereigntyServer
from sovcheck.service import SovereigntyChecker

app = typer.Typer(
    name="sovcheck",
    help="Bitcoin address sovereignty checker",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )


def _load_settings(**overrides: object) -> Settings:
    try:
        return get_settings(**overrides)
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(2)


async def _run_check(settings: Settings, address: str) -> Report:
    checker = SovereigntyChecker(settings)
    try:
        return await checker.report(address)
    finally:
        await checker.close()


@app.command()
def check(
    address: str = typer.Argument(..., help="Bitcoin address to check"),
    network: str | None = typer.Option(
        None, "--network", "-n", help="mainnet | testnet | signet"
    ),
    feerate: int | None = typer.Option(
        None, "--feerate", help="Fallback fee rate in sat/vB (used if no node estimate)"
    ),
    feelow: int | None = typer.Option(
        None, "--feelow", help="Low-fee threshold in sat/vB for consolidation planning"
    ),
    tor: str | None = typer.Option(
        None, "--tor", help="Tor SOCKS5 address (e.g. 127.0.0.1:9050) for outbound HTTP"
    ),
    insecure_tls: bool | None = typer.Option(
        None, "--insecure-tls/--verify-tls", help="Skip TLS verification (dev only)"
    ),
    node_only: bool | None = typer.Option(
        None, "--node-only/--explorer", help="Use local bitcoind only (no block explorer)"
    ),
    rpc_url: str | None = typer.Option(None, "--rpc-url", help="bitcoind RPC URL"),
    rpc_user: str | None = typer.Option(None, "--rpc-user", help="bitcoind RPC username"),
    rpc_password: str | None = typer.Option(
        None, "--rpc-password", help="bitcoind RPC password"
    ),
    ln_check: bool | None = typer.Option(
        None, "--ln-check/--no-ln-check", help="Also check LND readiness"
    ),
    lnd_url: str | None = typer.Option(None, "--lnd-url", help="LND REST base URL"),
    macaroon: str | None = typer.Option(
        None, "--macaroon", help="Path to LND macaroon file (admin or readonly)"
    ),
    lnd_insecure: bool | None = typer.Option(
        None, "--lnd-insecure/--lnd-verify", help="Skip TLS verification for LND"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Score one address and print the report as JSON."""
    settings = _load_settings(
        network=network,
        fee_fallback=feerate,
        fee_low=feelow,
        tor_socks5_addr=tor,
        insecure_tls=insecure_tls,
        node_only=node_only,
        rpc_url=rpc_url,
        rpc_user=rpc_user,
        rpc_password=rpc_password,
        lnd_enabled=ln_check,
        lnd_url=lnd_url,
        macaroon_path=macaroon,
        lnd_tls_insecure=lnd_insecure,
        log_level=log_level,
    )
    setup_logging(settings.log_level)

    try:
        report = asyncio.run(_run_check(settings, address))
    except BackendError as e:
        logger.error(f"onchain fetch failed: {e}")
        raise typer.Exit(1)

    typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))


async def _serve(settings: Settings) -> None:
    server = SovereigntyServer(settings, SovereigntyChecker(settings))
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop_event.set)

    try:
        await server.start()
        await stop_event.wait()
        logger.info("Received shutdown signal")
    finally:
        await server.stop()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="HTTP bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="HTTP port"),
    network: str | None = typer.Option(None, "--network", "-n", help="Default network"),
    feerate: int | None = typer.Option(None, "--feerate", help="Fallback fee rate in sat/vB"),
    feelow: int | None = typer.Option(None, "--feelow", help="Low-fee threshold in sat/vB"),
    tor: str | None = typer.Option(None, "--tor", help="Tor SOCKS5 address"),
    node_only: bool | None = typer.Option(None, "--node-only/--explorer"),
    rpc_url: str | None = typer.Option(None, "--rpc-url"),
    rpc_user: str | None = typer.Option(None, "--rpc-user"),
    rpc_password: str | None = typer.Option(None, "--rpc-password"),
    lnd_enabled: bool | None = typer.Option(
        None, "--lnd-enabled/--lnd-disabled", help="Enable /lnready and LN in /report"
    ),
    lnd_url: str | None = typer.Option(None, "--lnd-url"),
    macaroon: str | None = typer.Option(None, "--macaroon"),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Run the HTTP API until interrupted."""
    settings = _load_settings(
        http_host=host,
        http_port=port,
        network=network,
        fee_fallback=feerate,
        fee_low=feelow,
        tor_socks5_addr=tor,
        node_only=node_only,
        rpc_url=rpc_url,
        rpc_user=rpc_user,
        rpc_password=rpc_password,
        lnd_enabled=lnd_enabled,
        lnd_url=lnd_url,
        macaroon_path=macaroon,
        log_level=log_level,
    )
    setup_logging(settings.log_level)

    logger.info("Starting sovereignty checker")
    logger.info(f"Network: {settings.network.value}")
    logger.info(f"Mode: {'nodeonly' if settings.node_only else 'explorer'}")

    try:
        asyncio.run(_serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
