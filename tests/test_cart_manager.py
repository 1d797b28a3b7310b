"""Tests for the add-to-cart action."""

import asyncio
import logging
from datetime import datetime, timedelta

import pytest

from restock_bot.errors import AcquisitionError
from restock_bot.purchasing.cart_manager import CartManager

from fakes import FakeDriver


def make_cart(settings, cart_confirms=True, fail_on=()):
    target = settings.target
    driver = FakeDriver(target.add_to_cart_selector, target.cart_confirmation_selector,
                        cart_confirms=cart_confirms, fail_on=fail_on)
    return CartManager(driver, target, settings.element_timeout_ms), driver


def test_click_then_confirm(settings):
    cart, driver = make_cart(settings)

    result = asyncio.run(cart.add_to_cart())

    assert result.confirmed is True
    assert result.reason is None
    assert driver.calls == [
        ("click", settings.target.add_to_cart_selector),
        ("wait", settings.target.cart_confirmation_selector),
    ]


def test_unconfirmed_when_cart_never_renders(settings):
    cart, driver = make_cart(settings, cart_confirms=False)

    result = asyncio.run(cart.add_to_cart())

    assert result.confirmed is False
    assert result.reason == 'cart_confirmation_timeout'
    assert driver.count("click") == 1


def test_click_failure_raises(settings):
    cart, driver = make_cart(settings, fail_on=("click",))

    with pytest.raises(AcquisitionError):
        asyncio.run(cart.add_to_cart())

    assert driver.count("wait") == 0


def test_purchase_log_records_cart_time(settings, caplog):
    caplog.set_level(logging.INFO, logger="purchases")
    cart, _ = make_cart(settings)

    result = asyncio.run(cart.add_to_cart())

    added = [r.getMessage() for r in caplog.records
             if r.name == "purchases" and r.getMessage().startswith("ADDED TO CART")]
    assert len(added) == 1
    assert f"at {result.timestamp} " in added[0]
    assert datetime.fromisoformat(result.timestamp).utcoffset() == timedelta(0)


def test_unconfirmed_add_logs_when_it_gave_up(settings, caplog):
    caplog.set_level(logging.INFO, logger="purchases")
    cart, _ = make_cart(settings, cart_confirms=False)

    result = asyncio.run(cart.add_to_cart())

    errors = [r.getMessage() for r in caplog.records if r.name == "purchases" and r.levelno == logging.ERROR]
    assert errors == [
        f"Cart confirmation {settings.target.cart_confirmation_selector!r} "
        f"not seen within {settings.element_timeout_ms}ms (gave up at {result.timestamp})"
    ]
