from __future__ import annotations

from typing import Tuple

TABLE_NAME = "Products"

# Column order used for every SELECT/INSERT against the Products table.
PRODUCT_COLUMNS: Tuple[str, ...] = (
    "ProductID",
    "ProductName",
    "Category",
    "UnitPrice",
    "Quantity",
    "Supplier",
    "Status",
)

# Labels offered by the entry form; the column itself is free-form.
STATUS_ACTIVE = "Active"
STATUS_DISCONTINUED = "Discontinued"

STATUS_CHOICES: Tuple[str, ...] = (
    STATUS_ACTIVE,
    STATUS_DISCONTINUED,
)

# Largest value SQLite can hold in an INTEGER column.
MAX_QUANTITY = 2**63 - 1
