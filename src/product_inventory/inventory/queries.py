from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from ..logging import get_logger
from .db import InventoryDatabase
from .errors import InvalidArgumentError
from .models import Product


LOG = get_logger("inventory-queries")


class InventoryQueries:
    """Filtered and aggregated views over the Products table.

    Every call re-reads the full table through `InventoryDatabase.list_all`
    and transforms the snapshot in memory; nothing is cached between calls.
    """

    def __init__(self, db: Optional[InventoryDatabase] = None) -> None:
        self.db = db or InventoryDatabase()

    def by_category(self, category: Optional[str] = None) -> List[Product]:
        """Products in `category` (case-insensitive), ordered by name.

        An empty or missing category returns every product.
        """
        products = self.db.list_all()
        wanted = (category or "").strip()
        if not wanted:
            return products
        key = wanted.casefold()
        matches = [p for p in products if p.category.strip().casefold() == key]
        matches.sort(key=lambda p: p.product_name)
        LOG.debug(f"Category {wanted!r}: {len(matches)} of {len(products)} product(s)")
        return matches

    def low_stock(self, threshold: int) -> List[Product]:
        """Products with quantity <= threshold, lowest quantity first."""
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise InvalidArgumentError(
                f"Low-stock threshold must be an integer (got {threshold!r}).",
                operation="low_stock",
            )
        # sorted() is stable, so equal quantities keep list_all order
        result = sorted(
            (p for p in self.db.list_all() if p.quantity <= threshold),
            key=lambda p: p.quantity,
        )
        LOG.debug(f"Low stock (<= {threshold}): {len(result)} product(s)")
        return result

    def total_inventory_value(self) -> Decimal:
        total = sum((p.line_value for p in self.db.list_all()), Decimal("0"))
        LOG.debug(f"Total inventory value: {total}")
        return total
