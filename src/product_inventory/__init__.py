"""
Product Inventory – single-table product record manager.

Shared utilities (config, logging, paths) live at the package top level; the
SQLite-backed record store and query helpers live in `inventory`.
"""

__version__ = "0.1.0"

__all__ = [
    "config",
    "logging",
    "paths",
    "inventory",
]
