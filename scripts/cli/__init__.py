"""
Interactive stock ledger CLI.

Create and edit products, record entries and exits, load and export files,
and view reports from a numbered menu.

Entry point: scripts/interactive.py, python -m scripts.cli or stock-ledger
"""

from scripts.cli.main import main

__all__ = ["main"]
