"""
sovcheck - Bitcoin address sovereignty checker

Scores the UTXO set of an address, plans consolidation and optionally
assesses Lightning (LND) readiness.
"""

__version__ = "0.1.0"

from sovcheck.constants import DUST_THRESHOLD, SATS_PER_BTC
from sovcheck.models import (
    UTXO,
    ConsolidationPlan,
    NetworkType,
    NodeInfo,
    Readiness,
    Report,
    SourceMode,
    SovereigntyResult,
    UTXOSource,
)
from sovcheck.normalize import btc_per_kb_to_sat_per_vb, btc_to_sats, from_explorer, from_node
from sovcheck.planner import PlanInputs, decide_plan
from sovcheck.readiness import compute_readiness
from sovcheck.report import compose_report, summarize
from sovcheck.score import ScoreInput, compute_score, count_dust, estimate_sweep_fee

__all__ = [
    "ConsolidationPlan",
    "DUST_THRESHOLD",
    "NetworkType",
    "NodeInfo",
    "PlanInputs",
    "Readiness",
    "Report",
    "SATS_PER_BTC",
    "ScoreInput",
    "SourceMode",
    "SovereigntyResult",
    "UTXO",
    "UTXOSource",
    "btc_per_kb_to_sat_per_vb",
    "btc_to_sats",
    "compose_report",
    "compute_readiness",
    "compute_score",
    "count_dust",
    "decide_plan",
    "estimate_sweep_fee",
    "from_explorer",
    "from_node",
    "summarize",
]
