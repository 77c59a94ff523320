"""
Bitcoin unit, size-model and scoring constants.

The sweep size model is a rough legacy P2PKH estimate:
inputs * 148 + outputs * 34 + 10 vbytes. It overestimates segwit
spends, which keeps the sweep-cost warning on the conservative side.
"""

from __future__ import annotations

SATS_PER_BTC = 100_000_000

# Outputs strictly below this value are counted as dust
DUST_THRESHOLD = 1000  # satoshis

# Sweep transaction size model (vbytes)
P2PKH_INPUT_VBYTES = 148
OUTPUT_VBYTES = 34
TX_OVERHEAD_VBYTES = 10

# Sovereignty score
BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100
# Sweep fee above this share of the balance is flagged as expensive
MAX_SWEEP_FEE_RATIO = 0.05

# UTXO count thresholds
MODERATE_UTXO_COUNT = 10
HIGH_UTXO_COUNT = 30  # planner only
VERY_HIGH_UTXO_COUNT = 50  # scorer only

# Fee defaults (sat/vB)
DEFAULT_FEE_FALLBACK = 2
DEFAULT_FEE_LOW = 2
DEFAULT_FEE_TARGET_BLOCKS = 6
