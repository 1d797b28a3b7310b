#!/usr/bin/env python3
"""
Stock Monitor - Poll the product page until it can be added to the cart

    PROBING --unavailable--> BACKOFF_WAIT --> RELOAD --> PROBING
    PROBING --available----> ACQUIRING --> TERMINAL

The prober's AVAILABLE reading is the only way into ACQUIRING. The wait
between checks is the same fixed countdown every cycle. Any error from the
prober, the reload or the cart ends the run; only a failed SMS is absorbed,
because by then the item is already in the cart.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional

from ..config import WatchTarget
from ..errors import AcquisitionError, NotificationError
from ..notifications.sms_notifier import SmsNotifier, build_cart_message
from ..purchasing.cart_manager import AcquisitionResult, CartManager
from ..session.navigator import refresh_product
from ..session.session_manager import PageDriver
from .availability import AvailabilityProber, AvailabilityState
from .countdown import Countdown, print_remaining

RETRY_TIMEOUT_SECONDS = 15


class LoopState(Enum):
    PROBING = "probing"
    BACKOFF_WAIT = "backoff_wait"
    RELOAD = "reload"
    ACQUIRING = "acquiring"
    TERMINAL = "terminal"


@dataclass
class RetryCycle:
    """Unavailable checks seen so far and total seconds spent waiting"""
    count: int = 0
    waited_seconds: int = 0


@dataclass(frozen=True)
class AcquisitionSucceeded:
    """The item is in the cart; notified says whether the SMS went out"""
    notified: bool
    cycles: int
    acquisition: AcquisitionResult
    message_sid: Optional[str] = None
    notification_error: Optional[str] = None


class StockMonitor:
    """Runs the probe/backoff/reload loop once, then adds to cart and notifies"""

    def __init__(self, driver: PageDriver, target: WatchTarget,
                 prober: AvailabilityProber, cart_manager: CartManager, notifier: SmsNotifier,
                 retry_interval_seconds: int = RETRY_TIMEOUT_SECONDS,
                 delay: Callable[[float], Awaitable] = asyncio.sleep,
                 countdown_reporter: Optional[Callable[[int], None]] = print_remaining):
        self.driver = driver
        self.target = target
        self.prober = prober
        self.cart_manager = cart_manager
        self.notifier = notifier
        self.retry_interval_seconds = retry_interval_seconds
        self.delay = delay
        self.countdown_reporter = countdown_reporter
        self.logger = logging.getLogger(__name__)
        self.purchase_log = logging.getLogger('purchases')

        self.state = LoopState.PROBING
        self.cycle = RetryCycle()

    async def _wait_for_availability(self):
        while True:
            self.state = LoopState.PROBING
            if await self.prober.probe() is AvailabilityState.AVAILABLE:
                return

            self.cycle.count += 1
            self.state = LoopState.BACKOFF_WAIT
            self.logger.info(
                f"[{datetime.now(timezone.utc).isoformat()}] {self.target.name} is unavailable 😭 "
                f"(check #{self.cycle.count})"
            )
            countdown = Countdown(self.retry_interval_seconds, self.delay, self.countdown_reporter)
            self.cycle.waited_seconds += await countdown.run()

            self.state = LoopState.RELOAD
            self.logger.info("Refreshing page...")
            await refresh_product(self.driver, self.target)

    async def run(self) -> AcquisitionSucceeded:
        """Watch until available, add to cart, text the operator. Runs once."""
        if self.state is LoopState.TERMINAL:
            raise RuntimeError("Stock monitor already completed; it does not re-arm")

        self.logger.info("🏭 Check availability process started!")
        await self._wait_for_availability()

        self.state = LoopState.ACQUIRING
        result = await self.cart_manager.add_to_cart()
        if not result.confirmed:
            raise AcquisitionError(
                f"Clicked add to cart for {self.target.name} but the cart never confirmed it "
                f"({result.reason})"
            )

        self.state = LoopState.TERMINAL
        try:
            message_sid = self.notifier.send(build_cart_message(self.target))
        except NotificationError as e:
            self.logger.error(f"❌ SMS failed: {e}")
            self.purchase_log.error(f"Notification failed after add to cart: {e}")
            return AcquisitionSucceeded(
                notified=False,
                cycles=self.cycle.count,
                acquisition=result,
                notification_error=str(e)
            )

        self.purchase_log.info(f"Notification sent: {message_sid}")
        return AcquisitionSucceeded(
            notified=True,
            cycles=self.cycle.count,
            acquisition=result,
            message_sid=message_sid
        )
