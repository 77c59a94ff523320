"""
Report composition: one-line summary plus the full aggregate.
"""

from __future__ import annotations

from sovcheck.models import ConsolidationPlan, Readiness, Report, SovereigntyResult


def summarize(
    onchain: SovereigntyResult,
    plan: ConsolidationPlan,
    readiness: Readiness | None = None,
) -> str:
    plan_part = "Plan: CONSOLIDATE" if plan.recommended else "Plan: WAIT"

    if readiness is None:
        ln_part = "LN: n/a"
    elif readiness.ready:
        ln_part = f"LN: READY ({readiness.score}/100)"
    else:
        ln_part = f"LN: NOT READY ({readiness.score}/100)"

    return (
        f"Score {onchain.sovereignty_score}/100 • "
        f"{onchain.num_utxos} UTXOs ({onchain.dust_utxos} dust) • "
        f"Fee {onchain.fee_rate_sat_vb} sat/vB • {plan_part} • {ln_part}"
    )


def compose_report(
    onchain: SovereigntyResult,
    plan: ConsolidationPlan,
    readiness: Readiness | None = None,
) -> Report:
    return Report(
        sovereignty_summary=summarize(onchain, plan, readiness),
        onchain=onchain,
        consolidation_plan=plan,
        ln_readiness=readiness,
    )
