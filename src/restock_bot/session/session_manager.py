#!/usr/bin/env python3
"""
Browser Session Manager - Owns the single Playwright session for the bot
Launches Chromium, opens one page and hands out a PageDriver exposing only
the operations the bot needs.
"""

import logging
import subprocess
import sys
from typing import Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    ElementHandle,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeout,
)

from ..errors import DriverError


class PageDriver:
    """Narrow wrapper over a Playwright page"""

    def __init__(self, page: Page, default_timeout_ms: int = 30000):
        self.page = page
        self.default_timeout_ms = default_timeout_ms
        self.logger = logging.getLogger(__name__)

    async def navigate(self, url: str):
        try:
            await self.page.goto(url, wait_until='domcontentloaded')
        except PlaywrightError as e:
            raise DriverError(f"Navigation to {url} failed: {e}") from e

    async def click(self, selector: str):
        try:
            await self.page.click(selector)
        except PlaywrightError as e:
            raise DriverError(f"Click on {selector} failed: {e}") from e

    async def type_text(self, value: str):
        """Type into whatever element currently has focus"""
        try:
            await self.page.keyboard.type(value)
        except PlaywrightError as e:
            raise DriverError(f"Typing failed: {e}") from e

    async def wait_for_selector(self, selector: str,
                                timeout: Optional[int] = None) -> Optional[ElementHandle]:
        """Return the element handle, or None if it never appeared within timeout (ms)"""
        try:
            return await self.page.wait_for_selector(
                selector,
                timeout=timeout if timeout is not None else self.default_timeout_ms
            )
        except PlaywrightTimeout:
            self.logger.debug(f"Timed out waiting for {selector}")
            return None
        except PlaywrightError as e:
            raise DriverError(f"Waiting for {selector} failed: {e}") from e

    async def is_disabled(self, handle: ElementHandle) -> bool:
        try:
            return await handle.is_disabled()
        except PlaywrightError as e:
            raise DriverError(f"Could not read disabled state: {e}") from e

    async def reload(self):
        try:
            await self.page.reload(wait_until='domcontentloaded')
        except PlaywrightError as e:
            raise DriverError(f"Reload failed: {e}") from e


def install_browsers():
    """Install the Chromium build Playwright drives"""
    logger = logging.getLogger(__name__)
    logger.info("Installing Playwright Chromium...")
    try:
        subprocess.check_call([sys.executable, "-m", "playwright", "install", "chromium"])
    except (subprocess.CalledProcessError, OSError) as e:
        raise DriverError(f"Browser installation failed: {e}") from e
    logger.info("✅ Chromium installed")


class SessionManager:
    """Manages the browser session lifecycle for the bot"""

    def __init__(self, headless: bool = False, default_timeout_ms: int = 30000):
        self.headless = headless
        self.default_timeout_ms = default_timeout_ms
        self.logger = logging.getLogger(__name__)

        # Playwright instances
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self) -> PageDriver:
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def start(self) -> PageDriver:
        """Launch the browser and open the page the whole run uses"""
        self.logger.info("👷 Initializing...")
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=self.headless,
                args=['--disable-blink-features=AutomationControlled']
            )
            self.context = await self.browser.new_context(
                viewport={'width': 1920, 'height': 1080}
            )
            self.page = await self.context.new_page()
            self.page.set_default_timeout(self.default_timeout_ms)
        except PlaywrightError as e:
            await self.close()
            raise DriverError(f"Failed to launch browser: {e}") from e

        self.logger.info("✅ Successfully initialized!")
        return PageDriver(self.page, self.default_timeout_ms)

    async def close(self):
        """Close browser resources, ignoring teardown failures"""
        for resource in (self.context, self.browser):
            if resource is None:
                continue
            try:
                await resource.close()
            except PlaywrightError as e:
                self.logger.warning(f"Error closing {type(resource).__name__}: {e}")

        if self.playwright is not None:
            try:
                await self.playwright.stop()
            except PlaywrightError as e:
                self.logger.warning(f"Error stopping Playwright: {e}")

        self.playwright = None
        self.browser = None
        self.context = None
        self.page = None
