"""
Base UTXO backend interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sovcheck.models import UTXO, SourceMode


class BackendError(Exception):
    """Raised when an upstream UTXO or fee source fails."""


class LightningError(Exception):
    """Raised when the Lightning node cannot be queried."""


class UTXOBackend(ABC):
    """
    Source of UTXOs for a single address plus an optional fee estimate.

    Implementations hand back already-normalized UTXOs; the scoring engine
    never sees source-specific payloads.
    """

    mode: SourceMode

    @abstractmethod
    async def get_utxos(self, address: str) -> list[UTXO]:
        """Get UTXOs for an address. Raises BackendError on upstream failure."""

    @abstractmethod
    async def estimate_fee(self, target_blocks: int) -> int | None:
        """Estimate fee in sat/vB, or None when this source cannot estimate."""

    async def close(self) -> None:
        """Close backend connection"""
        pass
