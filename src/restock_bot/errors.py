"""Exceptions raised by the restock bot."""


class RestockBotError(Exception):
    """Base exception for bot errors."""
    pass


class ConfigError(RestockBotError):
    """Required configuration missing or malformed."""
    pass


class DriverError(RestockBotError):
    """A browser operation failed."""
    pass


class AuthenticationError(RestockBotError):
    """Sign-in flow did not complete."""
    pass


class NavigationError(RestockBotError):
    """Product page failed to load or reload."""
    pass


class ProbeError(RestockBotError):
    """Add-to-cart control could not be located on the page."""
    pass


class AcquisitionError(RestockBotError):
    """Add-to-cart clicked but the cart never confirmed it."""
    pass


class NotificationError(RestockBotError):
    """SMS transport rejected the message."""
    pass
