#!/usr/bin/env python3
"""
Interactive stock ledger CLI.

Usage:
    python3 scripts/interactive.py

Settings come from $STOCK_LEDGER_CONFIG (YAML) and the environment; the
default store is a local SQLite file, stock_ledger.db.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from scripts.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
