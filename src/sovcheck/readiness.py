"""
Lightning readiness score from an LND node snapshot.
"""

from __future__ import annotations

from sovcheck.constants import BASE_SCORE, MAX_SCORE, MIN_SCORE
from sovcheck.models import NodeInfo, Readiness


def compute_readiness(info: NodeInfo) -> Readiness:
    score = BASE_SCORE
    reasons: list[str] = []

    if info.synced_to_chain:
        score += 25
    else:
        score -= 25
        reasons.append("LND not synced to chain")

    if info.num_peers > 0:
        score += 10
    else:
        score -= 10
        reasons.append("No peers connected")

    # Channels add to the score but do not gate readiness
    if info.num_active_channels > 0:
        score += 15
    else:
        reasons.append(
            "No active channels (opening a channel required for most outgoing LN payments)"
        )

    return Readiness(
        ready=info.synced_to_chain and info.num_peers > 0,
        score=max(MIN_SCORE, min(MAX_SCORE, score)),
        reasons=tuple(reasons),
        info=info,
    )
