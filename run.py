#!/usr/bin/env python3
"""
Main entry point for the Best Buy restock bot
Runs straight from a checkout without installing the package.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from restock_bot.cli import main

if __name__ == "__main__":
    sys.exit(main())
