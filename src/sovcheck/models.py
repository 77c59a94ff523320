"""
Data models using Pydantic for validation and serialization.

All models are frozen: results are built once from their inputs and never
mutated, so they can be shared freely between concurrent requests.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class NetworkType(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    SIGNET = "signet"


class UTXOSource(str, Enum):
    """Provenance of a normalized UTXO."""

    EXPLORER = "explorer"
    NODE = "node"


class SourceMode(str, Enum):
    """Data-source mode used for one evaluation."""

    EXPLORER = "explorer"
    NODEONLY = "nodeonly"


class UTXO(BaseModel):
    txid: str
    vout: int = Field(..., ge=0)
    value: int = Field(..., ge=0, description="Value in satoshis")
    confirmed: bool
    # None means the origin cannot report the confirming height
    block_height: int | None = None
    source: UTXOSource

    model_config = {"frozen": True}


class FeeEstimate(BaseModel):
    sat_per_vb: int = Field(..., ge=0)
    source: str = "fallback"  # "node" or "fallback"

    model_config = {"frozen": True}


class SovereigntyResult(BaseModel):
    address: str
    network: NetworkType
    mode: SourceMode
    total_balance_sats: int = Field(..., ge=0)
    num_utxos: int = Field(..., ge=0)
    dust_utxos: int = Field(..., ge=0)
    estimated_sweep_fee_sats: int = Field(..., ge=0)
    fee_rate_sat_vb: int = Field(..., ge=0)
    sovereignty_score: int = Field(..., ge=0, le=100)
    warnings: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()
    utxos: tuple[UTXO, ...] = ()

    model_config = {"frozen": True}


class ConsolidationPlan(BaseModel):
    recommended: bool
    reason: str
    suggested_target: str
    notes: tuple[str, ...] = ()
    fee_now_sat_vb: int = Field(..., ge=0)
    fee_low_sat_vb: int = Field(..., ge=0)

    model_config = {"frozen": True}


class NodeInfo(BaseModel):
    """Snapshot of an LND node's GetInfo response (unknown keys ignored)."""

    identity_pubkey: str = ""
    alias: str = ""
    version: str = ""
    synced_to_chain: bool = False
    synced_to_graph: bool = False
    num_peers: int = 0
    num_active_channels: int = 0
    block_height: int = 0

    model_config = {"frozen": True, "extra": "ignore"}


class Readiness(BaseModel):
    ready: bool
    score: int = Field(..., ge=0, le=100)
    reasons: tuple[str, ...] = ()
    info: NodeInfo

    model_config = {"frozen": True}


class Report(BaseModel):
    sovereignty_summary: str
    onchain: SovereigntyResult
    consolidation_plan: ConsolidationPlan
    ln_readiness: Readiness | None = None

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; ln_readiness is left out when absent."""
        data = self.model_dump(mode="json")
        if self.ln_readiness is None:
            data.pop("ln_readiness")
        return data
