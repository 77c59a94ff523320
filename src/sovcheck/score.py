"""
Sovereignty score for the UTXO set of a single address.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from sovcheck.constants import (
    BASE_SCORE,
    DUST_THRESHOLD,
    MAX_SCORE,
    MAX_SWEEP_FEE_RATIO,
    MIN_SCORE,
    MODERATE_UTXO_COUNT,
    OUTPUT_VBYTES,
    P2PKH_INPUT_VBYTES,
    TX_OVERHEAD_VBYTES,
    VERY_HIGH_UTXO_COUNT,
)
from sovcheck.models import UTXO, NetworkType, SourceMode, SovereigntyResult

FRESH_ADDRESS_NOTE = "Use fresh addresses for incoming payments to reduce address reuse."
CONSOLIDATION_PRIVACY_NOTE = "Be careful: consolidation can reduce privacy by linking UTXOs."


@dataclass(frozen=True)
class ScoreInput:
    address: str
    network: NetworkType
    mode: SourceMode
    utxos: Sequence[UTXO] = field(default_factory=tuple)
    fee_rate_sat_vb: int = 0


def count_dust(utxos: Sequence[UTXO], dust_threshold: int = DUST_THRESHOLD) -> int:
    return sum(1 for utxo in utxos if utxo.value < dust_threshold)


def estimate_sweep_fee(num_inputs: int, num_outputs: int, fee_rate_sat_vb: int) -> int:
    """
    Rough fee for spending ``num_inputs`` into ``num_outputs``.

    Returns 0 when there is nothing to spend or nowhere to send it.
    """
    if num_inputs <= 0 or num_outputs <= 0:
        return 0
    vsize = num_inputs * P2PKH_INPUT_VBYTES + num_outputs * OUTPUT_VBYTES + TX_OVERHEAD_VBYTES
    return vsize * fee_rate_sat_vb


def compute_score(score_input: ScoreInput) -> SovereigntyResult:
    utxos = list(score_input.utxos)
    total = sum(utxo.value for utxo in utxos)
    num_utxos = len(utxos)
    dust = count_dust(utxos)
    sweep_fee = estimate_sweep_fee(num_utxos, 1, score_input.fee_rate_sat_vb)

    score = BASE_SCORE
    warnings: list[str] = []
    notes: list[str] = []

    if num_utxos == 0:
        score -= 10
        warnings.append("No UTXOs found for this address.")
    elif num_utxos > VERY_HIGH_UTXO_COUNT:
        score -= 20
        warnings.append("Very high UTXO count; sweeping could be expensive.")
    elif num_utxos > MODERATE_UTXO_COUNT:
        score -= 10
        warnings.append("Moderate UTXO count; consider consolidation when fees are low.")
    else:
        score += 10
        notes.append("UTXO count looks reasonable.")

    if dust > 0:
        score -= 10
        warnings.append(
            f"Dust UTXOs (< {DUST_THRESHOLD} sats) detected; may be uneconomical to spend."
        )

    if sweep_fee > 0 and total > 0:
        if sweep_fee / total > MAX_SWEEP_FEE_RATIO:
            score -= 10
            warnings.append(
                f"Estimated sweep fee is >{MAX_SWEEP_FEE_RATIO:.0%} of total balance."
            )
        else:
            score += 5
            notes.append("Sweep fee looks small relative to balance.")

    score = max(MIN_SCORE, min(MAX_SCORE, score))

    notes.extend([FRESH_ADDRESS_NOTE, CONSOLIDATION_PRIVACY_NOTE])

    return SovereigntyResult(
        address=score_input.address,
        network=score_input.network,
        mode=score_input.mode,
        total_balance_sats=total,
        num_utxos=num_utxos,
        dust_utxos=dust,
        estimated_sweep_fee_sats=sweep_fee,
        fee_rate_sat_vb=score_input.fee_rate_sat_vb,
        sovereignty_score=score,
        warnings=tuple(warnings),
        notes=tuple(notes),
        utxos=tuple(utxos),
    )
