#!/usr/bin/env python3
"""
Configuration for the restock bot

Secrets (Best Buy account, Twilio credentials) come from the environment,
with a .env file loaded through python-dotenv. Watch settings come from an
optional JSON file whose missing keys fall back to DEFAULT_CONFIG.
Everything is read once at startup; the resulting objects are immutable.
"""

import copy
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "config/watch_config.json"

REQUIRED_ENV_KEYS = (
    "EMAIL",
    "PASSWORD",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TO_NUMBER",
    "TWILIO_NUMBER",
)

DEFAULT_CONFIG = {
    "product": {
        "name": "Xbox Series X",
        "url": "https://www.bestbuy.com/site/microsoft-xbox-series-x-1tb-console-black/6428324.p?skuId=6428324",
        "cart_url": "https://www.bestbuy.com/cart",
    },
    "selectors": {
        "add_to_cart": "div[id^='fulfillment-add-to-cart-button-'] button",
        "cart_confirmation": "div[id^='shop-commerce-elements']",
    },
    "site": {
        "home_url": "https://www.bestbuy.com/",
        "header_sign_in": "button[data-lid='hdr_signin']",
        "menu_sign_in": "div[id^='shop-account-menu'] a[data-lid='ubr_mby_signin_b']",
        "email_input": "input[type='email']",
        "password_input": "input[type='password']",
        "submit_button": "button[type='submit']",
    },
    "settings": {
        "retry_interval_seconds": 15,
        "element_timeout_ms": 30000,
        "headless": False,
        "logging": {
            "level": "INFO",
            "log_dir": "logs",
        },
    },
}


@dataclass(frozen=True)
class Credentials:
    """Best Buy account used for sign-in"""
    email: str
    password: str

    @property
    def masked_email(self) -> str:
        name, _, domain = self.email.partition("@")
        return f"{name[:2]}***@{domain}" if domain else "***"


@dataclass(frozen=True)
class TwilioSettings:
    """Delivery credentials and phone numbers for the SMS notifier"""
    account_sid: str
    auth_token: str
    to_number: str
    from_number: str


@dataclass(frozen=True)
class WatchTarget:
    """The product page and the control whose state signals availability"""
    name: str
    url: str
    add_to_cart_selector: str
    cart_confirmation_selector: str
    cart_url: str


@dataclass(frozen=True)
class SiteSelectors:
    """Entry page and sign-in flow selectors"""
    home_url: str
    header_sign_in: str
    menu_sign_in: str
    email_input: str
    password_input: str
    submit_button: str


@dataclass(frozen=True)
class Settings:
    credentials: Credentials
    twilio: TwilioSettings
    target: WatchTarget
    site: SiteSelectors
    retry_interval_seconds: int
    element_timeout_ms: int
    headless: bool
    log_level: str
    log_dir: Path


def _merge(base: Dict, override: Mapping) -> Dict:
    """Recursively overlay override onto a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_watch_config(config_path: Optional[str] = None) -> Dict:
    """Load the JSON watch config, falling back to defaults for absent keys"""
    path = Path(config_path or DEFAULT_CONFIG_PATH)

    if not path.exists():
        if config_path:
            raise ConfigError(f"Config file not found: {path}")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be an object")

    return _merge(DEFAULT_CONFIG, data)


def load_environment(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Read required secrets from the environment.

    When environ is None, a .env file in the working directory is loaded
    first (already exported variables win) and os.environ is used.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    values = {key: (environ.get(key) or "").strip() for key in REQUIRED_ENV_KEYS}
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return values


def _section(config: Dict, name: str) -> Dict:
    value = config.get(name)
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be an object")
    return value


def _require_str(section: Dict, key: str, where: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{where}.{key} must be a non-empty string")
    return value


def _require_positive_int(section: Dict, key: str, where: str) -> int:
    value = section.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{where}.{key} must be a positive integer, got {value!r}")
    return value


def load_settings(config_path: Optional[str] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build the immutable Settings used for the whole process lifetime"""
    config = load_watch_config(config_path)
    env = load_environment(environ)

    product = _section(config, "product")
    selectors = _section(config, "selectors")
    site = _section(config, "site")
    settings = _section(config, "settings")
    logging_config = _section(settings, "logging")

    headless = settings.get("headless")
    if not isinstance(headless, bool):
        raise ConfigError(f"settings.headless must be true or false, got {headless!r}")

    level = _require_str(logging_config, "level", "settings.logging").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"settings.logging.level is not a logging level: {level}")

    return Settings(
        credentials=Credentials(email=env["EMAIL"], password=env["PASSWORD"]),
        twilio=TwilioSettings(
            account_sid=env["TWILIO_ACCOUNT_SID"],
            auth_token=env["TWILIO_AUTH_TOKEN"],
            to_number=env["TO_NUMBER"],
            from_number=env["TWILIO_NUMBER"],
        ),
        target=WatchTarget(
            name=_require_str(product, "name", "product"),
            url=_require_str(product, "url", "product"),
            add_to_cart_selector=_require_str(selectors, "add_to_cart", "selectors"),
            cart_confirmation_selector=_require_str(selectors, "cart_confirmation", "selectors"),
            cart_url=_require_str(product, "cart_url", "product"),
        ),
        site=SiteSelectors(
            home_url=_require_str(site, "home_url", "site"),
            header_sign_in=_require_str(site, "header_sign_in", "site"),
            menu_sign_in=_require_str(site, "menu_sign_in", "site"),
            email_input=_require_str(site, "email_input", "site"),
            password_input=_require_str(site, "password_input", "site"),
            submit_button=_require_str(site, "submit_button", "site"),
        ),
        retry_interval_seconds=_require_positive_int(settings, "retry_interval_seconds", "settings"),
        element_timeout_ms=_require_positive_int(settings, "element_timeout_ms", "settings"),
        headless=headless,
        log_level=level,
        log_dir=Path(_require_str(logging_config, "log_dir", "settings.logging")),
    )


def setup_logging(level: str = "INFO", log_dir: Path = Path("logs")):
    """
    Configure logging.

    level applies to monitor.log. Stdout is the operator's progress channel
    and always shows INFO and above.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level

    file_handler = logging.FileHandler(log_dir / 'monitor.log', encoding='utf-8')
    file_handler.setLevel(file_level)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)

    # Main logger
    logging.basicConfig(
        level=min(file_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[file_handler, console_handler],
        force=True
    )

    # Purchase logger (separate file)
    purchase_logger = logging.getLogger('purchases')
    for handler in list(purchase_logger.handlers):
        purchase_logger.removeHandler(handler)
        handler.close()
    purchase_handler = logging.FileHandler(log_dir / 'purchases.log', encoding='utf-8')
    purchase_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    )
    purchase_logger.addHandler(purchase_handler)
    purchase_logger.setLevel(logging.INFO)
