#!/usr/bin/env python3
"""
Command line entry point for the restock bot
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import List, Optional

from .bot import run_bot
from .config import DEFAULT_CONFIG_PATH, load_settings, setup_logging
from .errors import ConfigError, RestockBotError
from .session.session_manager import install_browsers


def print_banner():
    """Print startup banner"""
    print("""
    ================================================
    BEST BUY RESTOCK BOT
    Watch - Add to Cart - Text
    ================================================
    """)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Best Buy restock bot')
    parser.add_argument('--config', default=None,
                        help=f'Watch config JSON (default: {DEFAULT_CONFIG_PATH} if present)')
    headless = parser.add_mutually_exclusive_group()
    headless.add_argument('--headless', dest='headless', action='store_true', default=None,
                          help='Run the browser without a window')
    headless.add_argument('--headed', dest='headless', action='store_false',
                          help='Run the browser with a visible window')
    parser.add_argument('--install-browsers', action='store_true',
                        help='Install Playwright Chromium before starting')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Override the configured log level')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status"""
    args = build_parser().parse_args(argv)

    print_banner()

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}", flush=True)
        return 1

    overrides = {}
    if args.headless is not None:
        overrides['headless'] = args.headless
    if args.log_level:
        overrides['log_level'] = args.log_level
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    setup_logging(settings.log_level, settings.log_dir)
    logger = logging.getLogger(__name__)
    logger.info(f"📦 Watching: {settings.target.name}")
    logger.info(f"🔗 URL: {settings.target.url}")
    logger.info(f"⏱️  Check interval: {settings.retry_interval_seconds} seconds")

    try:
        if args.install_browsers:
            install_browsers()
        outcome = asyncio.run(run_bot(settings))
    except RestockBotError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("⏹️  Stopped by operator")
        return 130

    logger.info(f"🎉 {settings.target.name} is in your cart after {outcome.cycles} refresh(es)")
    if not outcome.notified:
        logger.warning(f"⚠️  Item is in the cart but the SMS was not delivered: {outcome.notification_error}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
