"""
Path management for Folio.

This module provides centralized path configuration for posts, datasets,
caches and run configurations. Using a single source of truth prevents
hardcoded paths scattered throughout the scripts and notebooks.

All paths are relative to the project root and use pathlib.Path for
cross-platform compatibility.
"""

from pathlib import Path


# Project root directory (folio/)
PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()

# Blog content
POSTS_DIR = PROJECT_ROOT / "_posts"

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PRICES_DATA_DIR = DATA_DIR / "prices"

# Cache directories
CACHE_DIR = PROJECT_ROOT / "cache"
CSV_CACHE_DIR = CACHE_DIR / "csv"

# Configuration directories
CONFIG_DIR = PROJECT_ROOT / "configs"


def ensure_dir(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_price_csv_path(symbol: str) -> Path:
    """
    Get path to the stock price CSV for a symbol.

    Args:
        symbol: Ticker symbol (e.g., "AAPL")

    Returns:
        Path to the CSV file
    """
    return PRICES_DATA_DIR / f"{symbol.upper()}.csv"


def get_config_path(name: str) -> Path:
    """
    Get path to a walkthrough configuration file.

    Args:
        name: Config name (with or without .yaml extension)

    Returns:
        Path to YAML file
    """
    if not name.endswith((".yaml", ".yml")):
        name = f"{name}.yaml"
    return CONFIG_DIR / name


def list_price_symbols() -> list[str]:
    """
    List all symbols with a price CSV available.

    Returns:
        Sorted list of ticker symbols
    """
    if not PRICES_DATA_DIR.exists():
        return []

    return sorted(f.stem.upper() for f in PRICES_DATA_DIR.glob("*.csv"))


# NOTE: directories are created lazily via ensure_dir(); importing this module
# never touches the filesystem.
