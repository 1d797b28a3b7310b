#!/usr/bin/env python3
"""
Best Buy Sign-In Automation
Opens the account menu, submits credentials and waits for the header to
come back in its signed-in form.
"""

import logging

from ..config import Credentials, SiteSelectors
from ..errors import AuthenticationError, DriverError
from .session_manager import PageDriver

logger = logging.getLogger(__name__)


async def _require_selector(driver: PageDriver, selector: str, timeout_ms: int, what: str):
    element = await driver.wait_for_selector(selector, timeout_ms)
    if element is None:
        raise AuthenticationError(f"Could not find {what} ({selector})")
    return element


async def sign_in(driver: PageDriver, credentials: Credentials, site: SiteSelectors,
                  timeout_ms: int = 30000):
    """
    Perform the full Best Buy sign-in flow.

    Raises AuthenticationError if any step fails. There is no retry here;
    a failed sign-in ends the run.
    """
    try:
        logger.info("📍 Navigating to Best Buy sign in page...")
        await driver.navigate(site.home_url)

        await driver.click(site.header_sign_in)
        await _require_selector(driver, site.menu_sign_in, timeout_ms, "account menu 'Sign In' link")
        await driver.click(site.menu_sign_in)

        logger.info(f"🔒 Signing into Best Buy as {credentials.masked_email}...")
        await driver.click(site.email_input)
        await driver.type_text(credentials.email)

        await driver.click(site.password_input)
        await driver.type_text(credentials.password)

        await driver.click(site.submit_button)

        # Header sign-in button re-renders once the account is loaded
        await _require_selector(driver, site.header_sign_in, timeout_ms, "signed-in header")

    except DriverError as e:
        raise AuthenticationError(f"Sign-in failed: {e}") from e

    logger.info("✅ Successfully signed in to Best Buy!")
