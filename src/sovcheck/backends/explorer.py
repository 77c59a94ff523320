"""
Esplora block explorer backend (Blockstream API by default).
"""

from __future__ import annotations

import httpx
from loguru import logger

from sovcheck.backends.base import BackendError, UTXOBackend
from sovcheck.models import UTXO, NetworkType, SourceMode
from sovcheck.network import build_http_client
from sovcheck.normalize import from_explorer

EXPLORER_URLS: dict[NetworkType, str] = {
    NetworkType.MAINNET: "https://blockstream.info/api",
    NetworkType.TESTNET: "https://blockstream.info/testnet/api",
    NetworkType.SIGNET: "https://blockstream.info/signet/api",
}

# Maximum characters of an error body kept in exception messages
ERROR_BODY_LIMIT = 1024


class ExplorerBackend(UTXOBackend):
    """
    UTXO lookups via a public Esplora instance.

    The explorer has no fee-estimate hook wired in, so ``estimate_fee``
    always reports unavailable and the caller's fallback rate is used.
    """

    mode = SourceMode.EXPLORER

    def __init__(
        self,
        network: NetworkType = NetworkType.TESTNET,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.network = network
        self.base_url = (base_url or EXPLORER_URLS[network]).rstrip("/")
        self._owns_client = client is None
        self.client = client or build_http_client()

    async def get_utxos(self, address: str) -> list[UTXO]:
        url = f"{self.base_url}/address/{address}/utxo"
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Explorer request failed: {url} - {e}")
            raise BackendError(f"fetch utxos (explorer): {e}") from e

        if response.status_code != 200:
            body = response.text[:ERROR_BODY_LIMIT]
            raise BackendError(f"explorer status {response.status_code}: {body}")

        try:
            records = response.json()
            utxos = from_explorer(records)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise BackendError(f"decode utxos: {e}") from e

        logger.debug(f"Explorer returned {len(utxos)} UTXOs")
        return utxos

    async def estimate_fee(self, target_blocks: int) -> int | None:
        return None

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
