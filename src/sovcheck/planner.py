"""
Consolidation planner.

Decides whether merging the UTXOs of an address is worth it right now,
based on how fragmented the set is and how the current fee rate compares
with a caller-supplied "low fee" threshold.
"""

from __future__ import annotations

from dataclasses import dataclass

from sovcheck.constants import HIGH_UTXO_COUNT, MODERATE_UTXO_COUNT
from sovcheck.models import ConsolidationPlan

NO_TARGET = "N/A"
CONSOLIDATE_TARGET = "Consolidate to 1–3 UTXOs"
WAIT_TARGET = "Wait for a low-fee window"


@dataclass(frozen=True)
class PlanInputs:
    num_utxos: int
    dust_count: int
    fee_now_sat_vb: int
    fee_low_sat_vb: int


def consolidation_pressure(num_utxos: int, dust_count: int) -> int:
    """Fragmentation pressure from 0 (none) to 3."""
    pressure = 0
    if num_utxos > MODERATE_UTXO_COUNT:
        pressure += 1
    if num_utxos > HIGH_UTXO_COUNT:
        pressure += 1
    if dust_count > 0:
        pressure += 1
    return pressure


def decide_plan(inputs: PlanInputs) -> ConsolidationPlan:
    fees = {"fee_now_sat_vb": inputs.fee_now_sat_vb, "fee_low_sat_vb": inputs.fee_low_sat_vb}

    if inputs.num_utxos <= 1:
        return ConsolidationPlan(
            recommended=False,
            reason="Already 0–1 UTXOs; consolidation not needed.",
            suggested_target=NO_TARGET,
            notes=(),
            **fees,
        )

    if consolidation_pressure(inputs.num_utxos, inputs.dust_count) == 0:
        return ConsolidationPlan(
            recommended=False,
            reason="UTXO set looks manageable; consolidation optional.",
            suggested_target=NO_TARGET,
            notes=(
                "Consolidate only when fees are low if you want to simplify future spending.",
            ),
            **fees,
        )

    if inputs.fee_now_sat_vb <= inputs.fee_low_sat_vb:
        return ConsolidationPlan(
            recommended=True,
            reason=(
                "Fees look low and UTXO fragmentation is high; "
                "consolidate now to reduce future fees."
            ),
            suggested_target=CONSOLIDATE_TARGET,
            notes=(
                "Consolidation can reduce privacy by linking coins.",
                "Consider privacy tools before consolidating large amounts.",
            ),
            **fees,
        )

    return ConsolidationPlan(
        recommended=False,
        reason=(
            "Fees look elevated; waiting for cheaper fees is likely better "
            "unless you must move coins soon."
        ),
        suggested_target=WAIT_TARGET,
        notes=(
            "If you must spend soon, consider consolidating only the smallest UTXOs.",
            "Re-check fee estimates from your node periodically.",
        ),
        **fees,
    )
