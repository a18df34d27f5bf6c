from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pytest
from click.testing import CliRunner

from bestbuy_stock_watcher import cli
from bestbuy_stock_watcher.config import Config
from bestbuy_stock_watcher.models import ProductAvailability


class FakeClient:
    calls: List[List[str]] = []

    def fetch(self, identifiers: Sequence[str]) -> List[ProductAvailability]:
        FakeClient.calls.append(list(identifiers))
        return [ProductAvailability(identifier=sku, name=f"Widget {sku}", available=True) for sku in identifiers]


@pytest.fixture
def handlers(monkeypatch: pytest.MonkeyPatch) -> Dict[int, Any]:
    installed: Dict[int, Any] = {}
    FakeClient.calls = []
    monkeypatch.setattr(cli, "BestBuyAPIClient", FakeClient)
    monkeypatch.setattr(cli.signal, "signal", lambda signum, handler: installed.__setitem__(signum, handler))
    for name, value in {
        "BEST_BUY_KEY": "KEY",
        "SKUS": ["1"],
        "REPEAT": False,
        "NOTIFICATIONS_ENABLED": True,
        "GOTIFY_URL": None,
        "GOTIFY_TOKEN": None,
        "HEARTBEAT_FILE": None,
    }.items():
        monkeypatch.setattr(Config, name, value)
    return installed


def test_dry_run_single_pass_prints_notifications(handlers: Dict[int, Any]) -> None:
    result = CliRunner().invoke(cli.main, ["--dry-run", "--once", "--sku", "10", "--sku", "20"])

    assert result.exit_code == 0, result.output
    assert FakeClient.calls == [["10", "20"]]
    assert result.output.count("Product Available") == 2
    assert cli.signal.SIGTERM in handlers


def test_missing_config_aborts_before_polling(handlers: Dict[int, Any], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Config, "BEST_BUY_KEY", None)

    result = CliRunner().invoke(cli.main, ["--once"])

    assert result.exit_code == 1
    assert "BEST_BUY_KEY" in result.output
    assert "GOTIFY_URL" in result.output
    assert FakeClient.calls == []


def test_no_notify_only_logs(handlers: Dict[int, Any]) -> None:
    result = CliRunner().invoke(cli.main, ["--no-notify"])

    assert result.exit_code == 0, result.output
    assert FakeClient.calls == [["1"]]
    assert "DRY RUN" not in result.output


def test_comma_separated_sku_option_is_split(handlers: Dict[int, Any]) -> None:
    result = CliRunner().invoke(cli.main, ["--dry-run", "--once", "--sku", "10,20", "--sku", "30"])

    assert result.exit_code == 0, result.output
    assert FakeClient.calls == [["10", "20", "30"]]
