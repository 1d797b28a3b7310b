#!/usr/bin/env python3
"""
Availability Prober - Reads the add-to-cart control on the loaded product page

The control has three observable states. Present and enabled means the item
can be added to the cart; present and disabled means it is sold out (or
otherwise not purchasable, which the page does not let us tell apart).
Absent means the page layout is not what we expect, which is an error
rather than an "unavailable" reading.
"""

import logging
from enum import Enum

from ..config import WatchTarget
from ..errors import DriverError, ProbeError
from ..session.session_manager import PageDriver


class ProbeResult(Enum):
    FOUND_ENABLED = "found_enabled"
    FOUND_DISABLED = "found_disabled"
    NOT_FOUND = "not_found"


class AvailabilityState(Enum):
    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"


class AvailabilityProber:
    """Side-effect free check of the add-to-cart control"""

    def __init__(self, driver: PageDriver, target: WatchTarget, timeout_ms: int = 30000):
        self.driver = driver
        self.target = target
        self.timeout_ms = timeout_ms
        self.logger = logging.getLogger(__name__)

    async def inspect(self) -> ProbeResult:
        """Locate the control and report which of the three states it is in"""
        try:
            button = await self.driver.wait_for_selector(self.target.add_to_cart_selector, self.timeout_ms)
            if button is None:
                return ProbeResult.NOT_FOUND
            disabled = await self.driver.is_disabled(button)
        except DriverError as e:
            raise ProbeError(f"Could not read add-to-cart control: {e}") from e

        return ProbeResult.FOUND_DISABLED if disabled else ProbeResult.FOUND_ENABLED

    async def probe(self) -> AvailabilityState:
        result = await self.inspect()
        self.logger.debug(f"Probe of {self.target.add_to_cart_selector}: {result.value}")

        if result is ProbeResult.NOT_FOUND:
            raise ProbeError(
                f"Add-to-cart control {self.target.add_to_cart_selector!r} not found on {self.target.url}"
            )
        if result is ProbeResult.FOUND_ENABLED:
            return AvailabilityState.AVAILABLE
        return AvailabilityState.UNAVAILABLE
