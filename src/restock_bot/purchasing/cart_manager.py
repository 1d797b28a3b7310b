#!/usr/bin/env python3
"""
Cart Manager - Adds the watched product to the Best Buy cart

Clicking the add-to-cart button is not proof of anything on its own: the item
can sell out between the probe and the click. The add only counts once the
cart panel renders on the page.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..config import WatchTarget
from ..errors import AcquisitionError, DriverError
from ..session.session_manager import PageDriver


@dataclass(frozen=True)
class AcquisitionResult:
    """Whether the cart confirmed the add, and how long it took"""
    confirmed: bool
    execution_time: float
    timestamp: str
    reason: Optional[str] = None


class CartManager:
    """Performs the add-to-cart click and waits for the cart to confirm it"""

    def __init__(self, driver: PageDriver, target: WatchTarget, timeout_ms: int = 30000):
        self.driver = driver
        self.target = target
        self.timeout_ms = timeout_ms
        self.logger = logging.getLogger(__name__)
        self.purchase_log = logging.getLogger('purchases')

    async def add_to_cart(self) -> AcquisitionResult:
        """
        Click add-to-cart once and wait for the cart confirmation.

        A confirmation that never shows up comes back as an unconfirmed
        result. A click that cannot be performed raises AcquisitionError.
        """
        start_time = time.time()
        self.logger.info(f"🥳 {self.target.name} is available!")
        self.purchase_log.info(f"Adding to cart: {self.target.name} ({self.target.url})")

        try:
            await self.driver.click(self.target.add_to_cart_selector)
            cart_panel = await self.driver.wait_for_selector(
                self.target.cart_confirmation_selector, self.timeout_ms
            )
        except DriverError as e:
            self.purchase_log.error(f"Add to cart failed: {e}")
            raise AcquisitionError(f"Could not add {self.target.name} to cart: {e}") from e

        execution_time = time.time() - start_time
        timestamp = datetime.now(timezone.utc).isoformat()

        if cart_panel is None:
            self.purchase_log.error(
                f"Cart confirmation {self.target.cart_confirmation_selector!r} "
                f"not seen within {self.timeout_ms}ms (gave up at {timestamp})"
            )
            return AcquisitionResult(
                confirmed=False,
                execution_time=execution_time,
                timestamp=timestamp,
                reason='cart_confirmation_timeout'
            )

        self.purchase_log.warning(
            f"ADDED TO CART: {self.target.name} at {timestamp} in {execution_time:.2f}s"
        )
        self.logger.info(f"✅ Successfully added {self.target.name} to cart!")
        return AcquisitionResult(
            confirmed=True,
            execution_time=execution_time,
            timestamp=timestamp
        )
