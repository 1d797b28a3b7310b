"""Tests for the backoff countdown."""

import asyncio

import pytest

from restock_bot.monitoring.countdown import Countdown, print_remaining

from fakes import RecordingDelay


def test_reports_every_second_down_to_zero():
    delay = RecordingDelay()
    reports = []
    countdown = Countdown(5, delay=delay, reporter=reports.append)

    waited = asyncio.run(countdown.run())

    assert reports == [5, 4, 3, 2, 1, 0]
    assert delay.calls == [1, 1, 1, 1, 1]
    assert waited == 5
    assert countdown.remaining == 0


def test_remaining_is_observable_between_ticks():
    seen = []
    countdown = None

    async def delay(seconds):
        seen.append(countdown.remaining)

    countdown = Countdown(3, delay=delay, reporter=None)
    asyncio.run(countdown.run())

    assert seen == [3, 2, 1]
    assert countdown.elapsed == 3


def test_rerun_repeats_same_sequence():
    reports = []
    countdown = Countdown(2, delay=RecordingDelay(), reporter=reports.append)

    asyncio.run(countdown.run())
    asyncio.run(countdown.run())

    assert reports == [2, 1, 0, 2, 1, 0]


@pytest.mark.parametrize("seconds", [0, -3])
def test_rejects_non_positive_length(seconds):
    with pytest.raises(ValueError):
        Countdown(seconds)


def test_print_remaining_overwrites_line(capsys):
    print_remaining(3)
    print_remaining(0)

    out = capsys.readouterr().out
    assert out == "\rRetrying in 3s...\rRetrying in 0s...\n"
