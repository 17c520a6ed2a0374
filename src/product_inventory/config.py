import os
from typing import Dict, Optional

from dotenv import dotenv_values

from .logging import get_logger
from .paths import expand_abs, find_project_root, var_dir

log = get_logger("config")

DB_PATH_ENV = "INVENTORY_DB_PATH"
LOW_STOCK_ENV = "INVENTORY_LOW_STOCK_THRESHOLD"

DEFAULT_DB_FOLDER = "inventory"
DEFAULT_DB_FILENAME = "Product.db"
DEFAULT_LOW_STOCK_THRESHOLD = 5


def _find_upwards(start_dir: str, filename: str) -> Optional[str]:
    """Return first matching file found when walking up from start_dir."""
    d = os.path.abspath(start_dir or ".")
    while True:
        candidate = os.path.join(d, filename)
        if os.path.isfile(candidate):
            return candidate
        parent = os.path.dirname(d)
        if parent == d:
            return None
        d = parent


def _read_dotenv(dotenv_dir: str) -> Dict[str, str]:
    """Read key/value pairs from the nearest .env without touching os.environ."""
    path = _find_upwards(dotenv_dir, ".env")
    if not path:
        log.debug(f"No .env found starting from: {os.path.abspath(dotenv_dir)}")
        return {}
    values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    log.debug(f"Loaded {len(values)} key(s) from .env at {path}")
    return values


def _lookup(key: str, dotenv_dir: str) -> Optional[str]:
    v = os.environ.get(key)
    if v and v.strip():
        return v.strip()
    v = _read_dotenv(dotenv_dir).get(key)
    if v and v.strip():
        return v.strip()
    return None


def default_db_path(root_dir: Optional[str] = None) -> str:
    """Return `<project-root>/var/inventory/Product.db`."""
    root = find_project_root(root_dir)
    return os.path.join(var_dir(root), DEFAULT_DB_FOLDER, DEFAULT_DB_FILENAME)


def load_db_path(explicit: Optional[str] = None, *, dotenv_dir: Optional[str] = None) -> str:
    """Resolve the inventory database path.

    Precedence: explicit argument, INVENTORY_DB_PATH from the environment,
    INVENTORY_DB_PATH from .env, then the project default.
    """
    base = dotenv_dir or os.getcwd()
    if explicit:
        return expand_abs(explicit)
    configured = _lookup(DB_PATH_ENV, base)
    if configured:
        log.info(f"Using {DB_PATH_ENV}={configured}")
        return expand_abs(configured)
    return default_db_path(base)


def load_low_stock_threshold(dotenv_dir: Optional[str] = None) -> int:
    raw = _lookup(LOW_STOCK_ENV, dotenv_dir or os.getcwd())
    if raw is None:
        return DEFAULT_LOW_STOCK_THRESHOLD
    try:
        return int(raw)
    except ValueError:
        log.warning(f"Ignoring non-integer {LOW_STOCK_ENV}={raw!r}; using {DEFAULT_LOW_STOCK_THRESHOLD}")
        return DEFAULT_LOW_STOCK_THRESHOLD
