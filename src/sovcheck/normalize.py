"""
UTXO normalization for the two supported data sources.

Explorer records (Esplora ``/address/<addr>/utxo``) already carry integer
satoshi values. Node records (Bitcoin Core ``listunspent``) report decimal
BTC amounts which are converted exactly once, here. The conversion goes
through ``Decimal`` and truncates anything below one satoshi; that is the
only lossy step in the pipeline and it is not treated as an error.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Any

from sovcheck.constants import SATS_PER_BTC
from sovcheck.models import UTXO, UTXOSource


def btc_to_sats(amount: float | str | Decimal) -> int:
    """Convert a BTC amount to satoshis, truncating toward zero."""
    sats = Decimal(str(amount)) * SATS_PER_BTC
    return int(sats.to_integral_value(rounding=ROUND_DOWN))


def btc_per_kb_to_sat_per_vb(btc_per_kb: float | str | Decimal) -> int:
    """
    Convert an ``estimatesmartfee`` rate (BTC/kvB) to sat/vB.

    Rounds half away from zero; anything below 1 sat/vB is raised to 1.
    """
    sat_per_vb = Decimal(str(btc_per_kb)) * SATS_PER_BTC / 1000
    if sat_per_vb < 1:
        return 1
    return int(sat_per_vb.to_integral_value(rounding=ROUND_HALF_UP))


def from_explorer(records: Iterable[dict[str, Any]]) -> list[UTXO]:
    utxos: list[UTXO] = []
    for record in records:
        status = record.get("status") or {}
        confirmed = bool(status.get("confirmed", False))
        utxos.append(
            UTXO(
                txid=record["txid"],
                vout=record["vout"],
                value=record["value"],
                confirmed=confirmed,
                block_height=status.get("block_height") if confirmed else None,
                source=UTXOSource.EXPLORER,
            )
        )
    return utxos


def from_node(records: Iterable[dict[str, Any]]) -> list[UTXO]:
    utxos: list[UTXO] = []
    for record in records:
        utxos.append(
            UTXO(
                txid=record["txid"],
                vout=record["vout"],
                value=btc_to_sats(record["amount"]),
                confirmed=record.get("confirmations", 0) > 0,
                # listunspent does not report the confirming block height
                block_height=None,
                source=UTXOSource.NODE,
            )
        )
    return utxos
