"""
Data-source backends.

Available backends:
- ExplorerBackend: Esplora block explorer (Blockstream by default)
- BitcoinCoreBackend: local Bitcoin Core node via RPC (node-only mode)
- LNDClient: LND REST, for the Lightning readiness snapshot
"""

from sovcheck.backends.base import BackendError, LightningError, UTXOBackend
from sovcheck.backends.bitcoin_core import BitcoinCoreBackend
from sovcheck.backends.explorer import ExplorerBackend
from sovcheck.backends.lnd import LNDClient

__all__ = [
    "BackendError",
    "BitcoinCoreBackend",
    "ExplorerBackend",
    "LNDClient",
    "LightningError",
    "UTXOBackend",
]
