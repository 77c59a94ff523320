"""
HTTP server exposing the checker as JSON endpoints.

Endpoints: /health, /check, /report, /lnready
Example: /report?address=...&network=mainnet|testnet|signet
"""

from __future__ import annotations

import contextlib

from aiohttp import web
from loguru import logger

from sovcheck.backends.base import BackendError
from sovcheck.config import Settings
from sovcheck.models import NetworkType
from sovcheck.service import SovereigntyChecker


class SovereigntyServer:
    def __init__(self, settings: Settings, checker: SovereigntyChecker) -> None:
        self.settings = settings
        self.checker = checker
        self.app = web.Application()
        self.runner: web.AppRunner | None = None
        self.site: web.TCPSite | None = None
        self._stopping = False
        self._setup_routes()

    def _setup_routes(self) -> None:
        self.app.router.add_get("/health", self._handle_health)
        self.app.router.add_get("/check", self._handle_check)
        self.app.router.add_get("/report", self._handle_report)
        self.app.router.add_get("/lnready", self._handle_lnready)

    def _resolve_network(self, request: web.Request) -> NetworkType:
        try:
            return NetworkType(request.query.get("network", ""))
        except ValueError:
            return self.settings.network

    async def _handle_health(self, _request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def _handle_check(self, request: web.Request) -> web.Response:
        address = request.query.get("address", "")
        if not address:
            return web.json_response({"error": "missing address"}, status=400)

        try:
            onchain, plan = await self.checker.check(address, self._resolve_network(request))
        except BackendError as e:
            logger.error(f"fetch utxos error: {e}")
            return web.json_response({"error": "failed to fetch utxos"}, status=502)

        return web.json_response(
            {
                "onchain": onchain.model_dump(mode="json"),
                "consolidation_plan": plan.model_dump(mode="json"),
            }
        )

    async def _handle_report(self, request: web.Request) -> web.Response:
        address = request.query.get("address", "")
        if not address:
            return web.json_response({"error": "missing address"}, status=400)

        try:
            report = await self.checker.report(address, self._resolve_network(request))
        except BackendError as e:
            logger.error(f"fetch utxos error: {e}")
            return web.json_response({"error": "failed to fetch utxos"}, status=502)

        return web.json_response(report.to_dict())

    async def _handle_lnready(self, _request: web.Request) -> web.Response:
        if not self.settings.lnd_enabled:
            return web.json_response({"error": "lnd not enabled"}, status=400)

        readiness = await self.checker.ln_readiness()
        if readiness is None:
            return web.json_response({"error": "lnd not configured or unavailable"}, status=502)

        return web.json_response(readiness.model_dump(mode="json"))

    async def start(self) -> None:
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        self.site = web.TCPSite(self.runner, self.settings.http_host, self.settings.http_port)
        await self.site.start()

        logger.info(f"Server listening on {self.settings.http_host}:{self.settings.http_port}")
        logger.info("Endpoints: /health, /check, /report, /lnready")
        logger.info("Example: /report?address=...&network=mainnet|testnet|signet")

    async def stop(self) -> None:
        if self._stopping:
            return
        self._stopping = True

        logger.info("Stopping server...")

        if self.site:
            with contextlib.suppress(RuntimeError):
                await self.site.stop()
            self.site = None

        if self.runner:
            with contextlib.suppress(RuntimeError):
                await self.runner.cleanup()
            self.runner = None

        await self.checker.close()
        logger.info("Server stopped")
