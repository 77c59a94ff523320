"""
Test fixtures and configuration.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from sovcheck.models import UTXO, NodeInfo, UTXOSource


@pytest.fixture
def make_utxos() -> Callable[..., list[UTXO]]:
    """Build ``count`` explorer UTXOs of ``value`` sats each."""

    def _make(count: int, value: int = 50_000) -> list[UTXO]:
        return [
            UTXO(
                txid=f"{i:064x}",
                vout=0,
                value=value,
                confirmed=True,
                block_height=800_000 + i,
                source=UTXOSource.EXPLORER,
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def explorer_records() -> list[dict[str, Any]]:
    return [
        {
            "txid": "a" * 64,
            "vout": 0,
            "value": 150_000,
            "status": {
                "confirmed": True,
                "block_height": 2_500_000,
                "block_hash": "00" * 32,
                "block_time": 1700000000,
            },
        },
        {
            "txid": "b" * 64,
            "vout": 3,
            "value": 546,
            "status": {"confirmed": False},
        },
    ]


@pytest.fixture
def node_records() -> list[dict[str, Any]]:
    return [
        {
            "txid": "c" * 64,
            "vout": 1,
            "address": "tb1qexample",
            "amount": 0.0015,
            "confirmations": 12,
            "spendable": False,
            "solvable": True,
        },
        {
            "txid": "d" * 64,
            "vout": 0,
            "address": "tb1qexample",
            "amount": 0.00000999,
            "confirmations": 0,
            "spendable": False,
            "solvable": True,
        },
    ]


@pytest.fixture
def synced_node() -> NodeInfo:
    return NodeInfo(
        identity_pubkey="02" + "ab" * 32,
        alias="test-node",
        version="0.17.0-beta",
        synced_to_chain=True,
        synced_to_graph=True,
        num_peers=5,
        num_active_channels=2,
        block_height=2_500_000,
    )
