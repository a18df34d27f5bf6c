from __future__ import annotations

import logging

import pytest

from bestbuy_stock_watcher.config import (
    DEFAULT_POLL_INTERVAL,
    Config,
    parse_bool,
    parse_identifiers,
    parse_interval,
    parse_priority,
)
from bestbuy_stock_watcher.exceptions import ConfigError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, DEFAULT_POLL_INTERVAL), ("", DEFAULT_POLL_INTERVAL), ("60", 60.0), ("2.5", 2.5),
     ("soon", DEFAULT_POLL_INTERVAL), ("0", DEFAULT_POLL_INTERVAL), ("-5", DEFAULT_POLL_INTERVAL),
     ("nan", DEFAULT_POLL_INTERVAL)],
)
def test_parse_interval_falls_back_to_default(raw: str | None, expected: float) -> None:
    assert parse_interval(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 0), ("", 0), ("5", 5), ("high", 0), ("-1", 0), ("1.5", 0)],
)
def test_parse_priority_falls_back_to_default(raw: str | None, expected: int) -> None:
    assert parse_priority(raw) == expected


@pytest.mark.parametrize(
    ("raw", "default", "expected"),
    [(None, True, True), ("yes", False, True), ("OFF", True, False), ("maybe", False, False)],
)
def test_parse_bool(raw: str | None, default: bool, expected: bool) -> None:
    assert parse_bool(raw, default) is expected


def test_parse_identifiers_is_ordered_and_deduplicated() -> None:
    assert parse_identifiers(" 6550199, 123,,6550199 ,42") == ["6550199", "123", "42"]
    assert parse_identifiers(("b", "a", "b")) == ["b", "a"]
    assert parse_identifiers(None) == []


def _configure(monkeypatch: pytest.MonkeyPatch, **values: object) -> None:
    defaults = {
        "BEST_BUY_KEY": "KEY",
        "SKUS": ["1"],
        "NOTIFICATIONS_ENABLED": True,
        "GOTIFY_URL": "https://gotify.example.com",
        "GOTIFY_TOKEN": "TOKEN",
    }
    defaults.update(values)
    for name, value in defaults.items():
        monkeypatch.setattr(Config, name, value)


def test_validate_passes_with_complete_config(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch)

    Config.validate()


def test_validate_lists_every_missing_value(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch, BEST_BUY_KEY=None, SKUS=[], GOTIFY_TOKEN=None)

    with pytest.raises(ConfigError) as excinfo:
        Config.validate()

    message = str(excinfo.value)
    assert "BEST_BUY_KEY" in message
    assert "SKUS" in message
    assert "GOTIFY_TOKEN" in message
    assert "GOTIFY_URL" not in message


def test_gotify_not_required_without_notifications(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch, GOTIFY_URL=None, GOTIFY_TOKEN=None)

    Config.validate(dry_run=True)
    Config.validate(notifications_enabled=False)


def test_identifier_override_satisfies_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch, SKUS=[])

    Config.validate(identifiers=["42"])


def test_parse_identifiers_splits_each_element_on_commas() -> None:
    assert parse_identifiers(("1,2", "3", " 2 ,4")) == ["1", "2", "3", "4"]


def test_parse_identifiers_drops_values_that_break_the_query() -> None:
    assert parse_identifiers("1,2)),(3") == ["1"]


def test_request_timeout_warning_names_the_setting(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert parse_interval("slow", 10.0, label="request timeout") == 10.0
        assert parse_interval("-1", 10.0, label="request timeout") == 10.0

    assert "request timeout" in caplog.text
    assert "Request timeout must be positive" in caplog.text
    assert "poll interval" not in caplog.text
