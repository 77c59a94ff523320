"""
Tests for CLI commands.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from sovcheck.backends.base import BackendError
from sovcheck.cli import app
from sovcheck.models import NetworkType, SourceMode
from sovcheck.planner import PlanInputs, decide_plan
from sovcheck.report import compose_report
from sovcheck.score import ScoreInput, compute_score

runner = CliRunner()


def _report(utxos):
    onchain = compute_score(
        ScoreInput(
            address="tb1qaddr",
            network=NetworkType.TESTNET,
            mode=SourceMode.EXPLORER,
            utxos=utxos,
            fee_rate_sat_vb=2,
        )
    )
    plan = decide_plan(
        PlanInputs(
            num_utxos=onchain.num_utxos,
            dust_count=onchain.dust_utxos,
            fee_now_sat_vb=2,
            fee_low_sat_vb=2,
        )
    )
    return compose_report(onchain, plan)


def _mock_checker(report=None, error=None) -> MagicMock:
    checker = MagicMock()
    if error is not None:
        checker.report = AsyncMock(side_effect=error)
    else:
        checker.report = AsyncMock(return_value=report)
    checker.close = AsyncMock()
    return checker


def test_check_prints_report(make_utxos):
    checker = _mock_checker(_report(make_utxos(3)))

    with patch("sovcheck.cli.SovereigntyChecker", return_value=checker) as checker_cls:
        result = runner.invoke(
            app, ["check", "tb1qaddr", "--network", "testnet", "--feelow", "3", "-l", "ERROR"]
        )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["onchain"]["address"] == "tb1qaddr"
    assert data["onchain"]["num_utxos"] == 3
    assert "ln_readiness" not in data
    assert data["sovereignty_summary"].endswith("LN: n/a")

    settings = checker_cls.call_args.args[0]
    assert settings.network == NetworkType.TESTNET
    assert settings.fee_low == 3
    checker.report.assert_awaited_once_with("tb1qaddr")
    checker.close.assert_awaited_once()


def test_check_passes_node_and_lightning_options(make_utxos):
    checker = _mock_checker(_report(make_utxos(1)))

    with patch("sovcheck.cli.SovereigntyChecker", return_value=checker) as checker_cls:
        result = runner.invoke(
            app,
            [
                "check",
                "tb1qaddr",
                "--node-only",
                "--rpc-url",
                "http://node:18332",
                "--rpc-user",
                "alice",
                "--rpc-password",
                "secret",
                "--ln-check",
                "--macaroon",
                "/tmp/readonly.macaroon",
                "-l",
                "ERROR",
            ],
        )

    assert result.exit_code == 0, result.output
    settings = checker_cls.call_args.args[0]
    assert settings.node_only is True
    assert settings.rpc_url == "http://node:18332"
    assert settings.rpc_user == "alice"
    assert settings.lnd_enabled is True
    assert settings.macaroon_path == "/tmp/readonly.macaroon"


def test_check_upstream_failure_exits_nonzero():
    checker = _mock_checker(error=BackendError("explorer status 400: Invalid Bitcoin address"))

    with patch("sovcheck.cli.SovereigntyChecker", return_value=checker):
        result = runner.invoke(app, ["check", "garbage", "-l", "CRITICAL"])

    assert result.exit_code == 1
    checker.close.assert_awaited_once()


def test_check_invalid_network():
    result = runner.invoke(app, ["check", "tb1qaddr", "--network", "regtest"])
    assert result.exit_code == 2


def test_check_requires_address():
    result = runner.invoke(app, ["check"])
    assert result.exit_code != 0
