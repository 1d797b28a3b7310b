"""
Browser Session Module

Provides the single Playwright session, Best Buy sign-in and product page
navigation.
"""

from .session_manager import SessionManager, PageDriver, install_browsers
from .authenticator import sign_in
from .navigator import goto_product, refresh_product

__all__ = ['SessionManager', 'PageDriver', 'install_browsers', 'sign_in', 'goto_product', 'refresh_product']
