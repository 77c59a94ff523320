"""
Bitcoin Core RPC backend for node-only mode.

Uses ``listunspent`` filtered by address, so the address has to be known
to the node's wallet (imported or watch-only).
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from sovcheck.backends.base import BackendError, UTXOBackend
from sovcheck.models import UTXO, SourceMode
from sovcheck.network import build_http_client
from sovcheck.normalize import btc_per_kb_to_sat_per_vb, from_node

RPC_ID = "sovereign-checker"

# listunspent confirmation window: include mempool, no upper bound in practice
LISTUNSPENT_MIN_CONF = 0
LISTUNSPENT_MAX_CONF = 9_999_999


class BitcoinCoreBackend(UTXOBackend):
    mode = SourceMode.NODEONLY

    def __init__(
        self,
        rpc_url: str = "http://127.0.0.1:18332",
        rpc_user: str = "",
        rpc_password: str = "",
        client: httpx.AsyncClient | None = None,
    ):
        self.rpc_url = rpc_url.rstrip("/")
        self.rpc_user = rpc_user
        self.rpc_password = rpc_password
        self._owns_client = client is None
        self.client = client or build_http_client()

    async def _rpc_call(self, method: str, params: list | None = None) -> Any:
        """
        Make an RPC call to Bitcoin Core.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            RPC result

        Raises:
            BackendError: On RPC errors, connection failures or bad payloads
        """
        payload = {
            "jsonrpc": "1.0",
            "id": RPC_ID,
            "method": method,
            "params": params or [],
        }

        try:
            response = await self.client.post(
                self.rpc_url, json=payload, auth=(self.rpc_user, self.rpc_password)
            )
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"RPC call failed: {method} - {e}")
            raise BackendError(f"bitcoind rpc {method}: {e}") from e
        except ValueError as e:
            # Bitcoin Core answers 401 with an empty body
            raise BackendError(
                f"bitcoind rpc {method}: invalid response (HTTP {response.status_code})"
            ) from e

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            code = error.get("code", "unknown")
            message = error.get("message", str(error))
            raise BackendError(f"bitcoind rpc error {code}: {message}")

        return data.get("result") if isinstance(data, dict) else None

    async def list_unspent(
        self, min_conf: int, max_conf: int, addresses: list[str]
    ) -> list[dict[str, Any]]:
        result = await self._rpc_call("listunspent", [min_conf, max_conf, addresses])
        if not isinstance(result, list):
            raise BackendError("bitcoind rpc listunspent: unexpected result")
        return result

    async def get_utxos(self, address: str) -> list[UTXO]:
        items = await self.list_unspent(LISTUNSPENT_MIN_CONF, LISTUNSPENT_MAX_CONF, [address])
        try:
            utxos = from_node(items)
        except (ValueError, KeyError, TypeError, ArithmeticError) as e:
            raise BackendError(f"decode listunspent: {e}") from e
        logger.debug(f"listunspent returned {len(utxos)} UTXOs")
        return utxos

    async def estimate_fee(self, target_blocks: int) -> int | None:
        try:
            result = await self._rpc_call("estimatesmartfee", [target_blocks])
        except BackendError as e:
            logger.warning(f"Failed to estimate fee: {e}, using fallback")
            return None

        if not isinstance(result, dict):
            logger.warning("Fee estimation returned unexpected result, using fallback")
            return None

        feerate = result.get("feerate")
        # bool is an int subclass
        if isinstance(feerate, bool) or not isinstance(feerate, (int, float)) or feerate <= 0:
            logger.warning("Fee estimation unavailable, using fallback")
            return None

        sat_per_vb = btc_per_kb_to_sat_per_vb(feerate)
        logger.debug(f"Estimated fee for {target_blocks} blocks: {sat_per_vb} sat/vB")
        return sat_per_vb

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
