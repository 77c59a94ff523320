"""
Tests for sovcheck.normalize
"""

from decimal import Decimal

import pytest

from sovcheck.models import UTXOSource
from sovcheck.normalize import btc_per_kb_to_sat_per_vb, btc_to_sats, from_explorer, from_node


def test_from_explorer_copies_fields(explorer_records):
    utxos = from_explorer(explorer_records)

    assert len(utxos) == 2
    first, second = utxos
    assert first.txid == "a" * 64
    assert first.vout == 0
    assert first.value == 150_000
    assert first.confirmed is True
    assert first.block_height == 2_500_000
    assert first.source == UTXOSource.EXPLORER

    # Unconfirmed outputs have no height
    assert second.confirmed is False
    assert second.block_height is None
    assert second.value == 546


def test_from_node_converts_amounts(node_records):
    utxos = from_node(node_records)

    assert [u.value for u in utxos] == [150_000, 999]
    assert utxos[0].confirmed is True
    assert utxos[1].confirmed is False
    assert all(u.block_height is None for u in utxos)
    assert all(u.source == UTXOSource.NODE for u in utxos)


def test_order_preserved(explorer_records):
    utxos = from_explorer(list(reversed(explorer_records)))
    assert [u.txid for u in utxos] == ["b" * 64, "a" * 64]


def test_empty_inputs():
    assert from_explorer([]) == []
    assert from_node([]) == []


@pytest.mark.parametrize(
    "amount,expected",
    [
        (0.1, 10_000_000),
        (0.29, 29_000_000),  # 0.29 * 1e8 is 28999999.999999996 in float math
        (1.0, 100_000_000),
        ("0.00000001", 1),
        (Decimal("0.123456789"), 12_345_678),  # sub-satoshi digits truncated
        (0, 0),
    ],
)
def test_btc_to_sats(amount, expected):
    assert btc_to_sats(amount) == expected


@pytest.mark.parametrize(
    "btc_per_kb,expected",
    [
        (0.00001, 1),
        (0.000005, 1),  # below 1 sat/vB is raised to 1
        (0.0001, 10),
        (0.000025, 3),  # 2.5 rounds away from zero
        (0.00012345, 12),
    ],
)
def test_btc_per_kb_to_sat_per_vb(btc_per_kb, expected):
    assert btc_per_kb_to_sat_per_vb(btc_per_kb) == expected
