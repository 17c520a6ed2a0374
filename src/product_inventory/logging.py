"""Package logging.

Every module logs through a child of the `product_inventory` logger. Handlers
live only on that package logger, so children share one stderr handler (and
the optional LOG_FILE handler) no matter how many components ask for one.
stdout is left to command output such as `--json` listings.
"""

import logging
import os
from typing import Optional, Union

ROOT_LOGGER_NAME = "product_inventory"

_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _coerce_level(value: Optional[Union[str, int]]) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        resolved = logging.getLevelName(value.strip().upper())
        if isinstance(resolved, int):
            return resolved
    return logging.INFO


def configure_logging(level: Optional[Union[str, int]] = None, log_file: Optional[str] = None) -> logging.Logger:
    """(Re)build the handlers of the package logger.

    `level` falls back to LOG_LEVEL, `log_file` to LOG_FILE. Calling it again
    replaces the previous handlers, so the CLI can apply `--log-level` after
    module-level loggers already exist.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    resolved = _coerce_level(level if level is not None else os.environ.get("LOG_LEVEL"))
    root.setLevel(resolved)
    root.propagate = False
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    root.addHandler(sh)

    path = log_file if log_file is not None else os.environ.get("LOG_FILE")
    if path:
        try:
            fh = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            root.warning(f"Log file {path} could not be opened; continuing without file logging")
        else:
            fh.setFormatter(formatter)
            root.addHandler(fh)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return the `product_inventory.<name>` logger, configuring the package once."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
