"""Tests for the command line entry point and its exit codes."""

import pytest

from restock_bot import cli
from restock_bot.errors import AcquisitionError, ConfigError, ProbeError
from restock_bot.monitoring.stock_monitor import AcquisitionSucceeded
from restock_bot.purchasing.cart_manager import AcquisitionResult

ADDED = AcquisitionResult(confirmed=True, execution_time=0.4, timestamp="2026-10-18T12:00:00+00:00")


@pytest.fixture
def patched(monkeypatch, settings):
    calls = {"settings": [], "installed": 0}
    outcome = {"value": AcquisitionSucceeded(notified=True, cycles=2, acquisition=ADDED, message_sid="SM1")}

    def fake_load_settings(path):
        return settings

    async def fake_run_bot(run_settings):
        calls["settings"].append(run_settings)
        if isinstance(outcome["value"], Exception):
            raise outcome["value"]
        return outcome["value"]

    def fake_install():
        calls["installed"] += 1

    monkeypatch.setattr(cli, "load_settings", fake_load_settings)
    monkeypatch.setattr(cli, "run_bot", fake_run_bot)
    monkeypatch.setattr(cli, "install_browsers", fake_install)
    return calls, outcome


def test_success_exits_zero(patched):
    calls, _ = patched
    assert cli.main([]) == 0
    assert len(calls["settings"]) == 1
    assert calls["installed"] == 0


def test_failed_sms_still_exits_zero(patched, capsys):
    _, outcome = patched
    outcome["value"] = AcquisitionSucceeded(notified=False, cycles=0, acquisition=ADDED,
                                            notification_error="HTTP 401")

    assert cli.main([]) == 0
    assert "SMS was not delivered" in capsys.readouterr().out


@pytest.mark.parametrize("error", [
    ProbeError("control gone"),
    AcquisitionError("cart never confirmed"),
])
def test_fatal_errors_exit_one(patched, capsys, error):
    _, outcome = patched
    outcome["value"] = error

    assert cli.main([]) == 1
    assert type(error).__name__ in capsys.readouterr().out


def test_config_error_exits_one_before_running(monkeypatch, capsys):
    def broken(path):
        raise ConfigError("Missing required environment variables: EMAIL")

    async def never(settings):
        raise AssertionError("bot must not start")

    monkeypatch.setattr(cli, "load_settings", broken)
    monkeypatch.setattr(cli, "run_bot", never)

    assert cli.main([]) == 1
    assert "ERROR: Missing required environment variables: EMAIL" in capsys.readouterr().out


def test_headless_flag_overrides_config(patched):
    calls, _ = patched
    cli.main(["--headless"])
    assert calls["settings"][0].headless is True


def test_headed_flag_overrides_config(patched):
    calls, _ = patched
    cli.main(["--headed", "--log-level", "DEBUG"])
    assert calls["settings"][0].headless is False
    assert calls["settings"][0].log_level == "DEBUG"


def test_install_browsers_flag(patched):
    calls, _ = patched
    cli.main(["--install-browsers"])
    assert calls["installed"] == 1


def test_warning_log_level_still_prints_progress(patched, capsys):
    cli.main(["--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert "Watching: Xbox Series X" in out
    assert "is in your cart after 2 refresh(es)" in out
