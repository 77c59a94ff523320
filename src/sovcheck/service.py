"""
Sovereignty checker service.

Wires the data-source backends to the scoring engine: fetch UTXOs and a
fee estimate, score them, plan consolidation, optionally take an LND
snapshot, and compose the report. Upstream UTXO failures propagate as
BackendError; Lightning failures only drop the readiness section.
"""

from __future__ import annotations

from loguru import logger

from sovcheck.backends.base import LightningError, UTXOBackend
from sovcheck.backends.bitcoin_core import BitcoinCoreBackend
from sovcheck.backends.explorer import ExplorerBackend
from sovcheck.backends.lnd import LNDClient
from sovcheck.config import Settings
from sovcheck.models import (
    ConsolidationPlan,
    FeeEstimate,
    NetworkType,
    Readiness,
    Report,
    SovereigntyResult,
)
from sovcheck.network import build_http_client
from sovcheck.planner import PlanInputs, decide_plan
from sovcheck.readiness import compute_readiness
from sovcheck.report import compose_report
from sovcheck.score import ScoreInput, compute_score


class SovereigntyChecker:
    def __init__(
        self,
        settings: Settings,
        backend: UTXOBackend | None = None,
        lnd: LNDClient | None = None,
    ):
        self.settings = settings
        self._backend = backend
        self._lnd = lnd
        # Injected collaborators belong to the caller
        self._owns_backend = backend is None
        self._owns_lnd = lnd is None
        self._explorers: dict[NetworkType, ExplorerBackend] = {}
        self._client = None
        if backend is None:
            self._client = build_http_client(settings.http_client_config())
            if settings.node_only:
                self._backend = BitcoinCoreBackend(
                    rpc_url=settings.rpc_url,
                    rpc_user=settings.rpc_user,
                    rpc_password=settings.rpc_password,
                    client=self._client,
                )

    def backend_for(self, network: NetworkType) -> UTXOBackend:
        if self._backend is not None:
            return self._backend
        if network not in self._explorers:
            # A custom explorer URL only applies to the configured network
            base_url = self.settings.explorer_url if network == self.settings.network else None
            self._explorers[network] = ExplorerBackend(
                network=network, base_url=base_url, client=self._client
            )
        return self._explorers[network]

    async def fee_estimate(self, backend: UTXOBackend) -> FeeEstimate:
        rate = await backend.estimate_fee(self.settings.fee_target_blocks)
        if rate is not None and rate > 0:
            return FeeEstimate(sat_per_vb=rate, source="node")
        return FeeEstimate(sat_per_vb=self.settings.fee_fallback, source="fallback")

    async def fetch_onchain(
        self, address: str, network: NetworkType | None = None
    ) -> SovereigntyResult:
        network = network or self.settings.network
        backend = self.backend_for(network)

        utxos = await backend.get_utxos(address)
        fee = await self.fee_estimate(backend)
        logger.debug(
            f"{len(utxos)} UTXOs via {backend.mode.value}, "
            f"fee {fee.sat_per_vb} sat/vB ({fee.source})"
        )

        return compute_score(
            ScoreInput(
                address=address,
                network=network,
                mode=backend.mode,
                utxos=utxos,
                fee_rate_sat_vb=fee.sat_per_vb,
            )
        )

    def plan_for(self, onchain: SovereigntyResult) -> ConsolidationPlan:
        return decide_plan(
            PlanInputs(
                num_utxos=onchain.num_utxos,
                dust_count=onchain.dust_utxos,
                fee_now_sat_vb=onchain.fee_rate_sat_vb,
                fee_low_sat_vb=self.settings.fee_low,
            )
        )

    async def ln_readiness(self) -> Readiness | None:
        """LND readiness, or None when disabled, unconfigured or unreachable."""
        if not self.settings.lnd_enabled:
            return None
        if self._lnd is None:
            if not self.settings.lnd_configured():
                logger.warning("LND check requested but no macaroon/URL configured (omitting)")
                return None
            try:
                self._lnd = LNDClient(
                    base_url=self.settings.lnd_url,
                    macaroon_path=self.settings.macaroon_path,
                    tls_insecure=self.settings.lnd_tls_insecure,
                )
            except LightningError as e:
                logger.warning(f"lnd init error (omitting): {e}")
                return None

        try:
            info = await self._lnd.get_info()
        except LightningError as e:
            logger.warning(f"lnd getinfo error (omitting): {e}")
            return None
        return compute_readiness(info)

    async def check(
        self, address: str, network: NetworkType | None = None
    ) -> tuple[SovereigntyResult, ConsolidationPlan]:
        onchain = await self.fetch_onchain(address, network)
        return onchain, self.plan_for(onchain)

    async def report(self, address: str, network: NetworkType | None = None) -> Report:
        onchain, plan = await self.check(address, network)
        readiness = await self.ln_readiness()
        return compose_report(onchain, plan, readiness)

    async def close(self) -> None:
        if self._owns_backend and self._backend is not None:
            await self._backend.close()
        for explorer in self._explorers.values():
            await explorer.close()
        if self._owns_lnd and self._lnd is not None:
            await self._lnd.close()
        if self._client is not None:
            await self._client.aclose()
