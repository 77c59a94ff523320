"""
LND REST client, used only to take a GetInfo snapshot.
"""

from __future__ import annotations

from pathlib import Path

import httpx
from loguru import logger
from pydantic import ValidationError

from sovcheck.backends.base import LightningError
from sovcheck.models import NodeInfo

DEFAULT_LND_TIMEOUT = 10.0

# Maximum characters of an error body kept in exception messages
ERROR_BODY_LIMIT = 2048


class LNDClient:
    """
    Minimal LND REST client authenticated with a macaroon.

    LND usually serves a self-signed certificate, hence ``tls_insecure``
    defaults to True; pass False once the node's cert is trusted.
    """

    def __init__(
        self,
        base_url: str,
        macaroon_path: str | Path,
        tls_insecure: bool = True,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        try:
            self.macaroon_hex = Path(macaroon_path).read_bytes().hex()
        except OSError as e:
            raise LightningError(f"cannot read macaroon {macaroon_path}: {e}") from e
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=DEFAULT_LND_TIMEOUT, verify=not tls_insecure
        )

    async def _get(self, path: str) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.get(
                url, headers={"Grpc-Metadata-macaroon": self.macaroon_hex}
            )
        except httpx.HTTPError as e:
            logger.error(f"LND request failed: {path} - {e}")
            raise LightningError(f"lnd request {path}: {e}") from e

        if response.status_code != 200:
            raise LightningError(
                f"lnd http {response.status_code}: {response.text[:ERROR_BODY_LIMIT]}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise LightningError(f"lnd {path}: invalid JSON") from e

    async def get_info(self) -> NodeInfo:
        data = await self._get("/v1/getinfo")
        try:
            info = NodeInfo.model_validate(data)
        except ValidationError as e:
            raise LightningError(f"lnd getinfo: unexpected payload: {e}") from e
        logger.debug(
            f"LND {info.alias or info.identity_pubkey[:16]}: synced={info.synced_to_chain}, "
            f"peers={info.num_peers}, channels={info.num_active_channels}"
        )
        return info

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
