#!/usr/bin/env python3
"""
Restock Bot - One run from sign-in to SMS

    launch browser -> sign in -> open product page -> watch -> add to cart -> text

Every component gets the same PageDriver passed in explicitly.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .config import Settings
from .monitoring.availability import AvailabilityProber
from .monitoring.stock_monitor import AcquisitionSucceeded, StockMonitor
from .notifications.sms_notifier import SmsNotifier
from .purchasing.cart_manager import CartManager
from .session.authenticator import sign_in
from .session.navigator import goto_product
from .session.session_manager import SessionManager

logger = logging.getLogger(__name__)


async def run_bot(settings: Settings,
                  session_manager: Optional[SessionManager] = None,
                  notifier: Optional[SmsNotifier] = None,
                  delay: Callable[[float], Awaitable] = asyncio.sleep) -> AcquisitionSucceeded:
    """Run the whole lifecycle once; errors propagate to the caller"""
    if notifier is None:
        notifier = SmsNotifier(settings.twilio)
    if session_manager is None:
        session_manager = SessionManager(
            headless=settings.headless,
            default_timeout_ms=settings.element_timeout_ms
        )

    async with session_manager as driver:
        await sign_in(driver, settings.credentials, settings.site, settings.element_timeout_ms)
        await goto_product(driver, settings.target)

        monitor = StockMonitor(
            driver,
            settings.target,
            prober=AvailabilityProber(driver, settings.target, settings.element_timeout_ms),
            cart_manager=CartManager(driver, settings.target, settings.element_timeout_ms),
            notifier=notifier,
            retry_interval_seconds=settings.retry_interval_seconds,
            delay=delay
        )
        return await monitor.run()
