"""CLI configuration: settings resolution and paths."""

from pathlib import Path

from stock_config import StockSettings, load_settings

# Project root (parent of scripts/)
ROOT = Path(__file__).resolve().parent.parent.parent

LOG_DIR = ROOT / "logs"
LOG_PATH = LOG_DIR / "interactive.log"


def resolve_settings(path: str | None = None) -> StockSettings:
    """Settings for the interactive CLI (YAML file, then environment)."""
    return load_settings(path)
