"""Product page navigation"""

import logging

from ..config import WatchTarget
from ..errors import DriverError, NavigationError
from .session_manager import PageDriver

logger = logging.getLogger(__name__)


async def goto_product(driver: PageDriver, target: WatchTarget):
    """Open the watched product page in the signed-in session"""
    logger.info(f"📍 Navigating to {target.name} page...")
    try:
        await driver.navigate(target.url)
    except DriverError as e:
        raise NavigationError(f"Could not load {target.url}: {e}") from e
    logger.info(f"✅ Successfully navigated to {target.name} page!")


async def refresh_product(driver: PageDriver, target: WatchTarget):
    """Reload the current page in place so session and cart state survive"""
    try:
        await driver.reload()
    except DriverError as e:
        raise NavigationError(f"Could not reload {target.name} page: {e}") from e
