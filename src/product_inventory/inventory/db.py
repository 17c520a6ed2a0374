from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Iterator, List, Optional, Tuple

from ..config import load_db_path
from ..logging import get_logger
from .constants import MAX_QUANTITY, PRODUCT_COLUMNS, TABLE_NAME
from .errors import (
    DuplicateKeyError,
    InvalidArgumentError,
    NotFoundError,
    StorageUnavailableError,
)
from .models import Product, blank_to_none, none_to_blank, price_is_storable


LOG = get_logger("inventory-db")


SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
  ProductID   TEXT PRIMARY KEY,
  ProductName TEXT NOT NULL,
  Category    TEXT,
  UnitPrice   REAL,
  Quantity    INTEGER,
  Supplier    TEXT,
  Status      TEXT
);
"""

_COLUMN_LIST = ", ".join(PRODUCT_COLUMNS)

_SELECT_ALL_SQL = f"SELECT {_COLUMN_LIST} FROM {TABLE_NAME} ORDER BY ProductName, ProductID;"

_INSERT_SQL = f"""
INSERT INTO {TABLE_NAME} ({_COLUMN_LIST})
VALUES (?, ?, ?, ?, ?, ?, ?);
"""

_UPDATE_SQL = f"""
UPDATE {TABLE_NAME}
SET ProductName = ?,
    Category = ?,
    UnitPrice = ?,
    Quantity = ?,
    Supplier = ?,
    Status = ?
WHERE ProductID = ?;
"""

_DELETE_SQL = f"DELETE FROM {TABLE_NAME} WHERE ProductID = ?;"


class InventoryDatabase:
    """SQLite-backed store for the Products table.

    - Resolves the DB path once (explicit path, INVENTORY_DB_PATH, or
      `<project-root>/var/inventory/Product.db`).
    - Ensures schema on construction.
    - Every public method opens and closes its own connection.
    """

    def __init__(self, db_path: Optional[str] = None, *, root_dir: Optional[str] = None) -> None:
        self.db_path = load_db_path(db_path, dotenv_dir=root_dir)
        LOG.info(f"Inventory DB path: {self.db_path}")
        self.ensure_schema()

    @contextmanager
    def connect(self, operation: str = "connect") -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            LOG.error(f"{operation}: cannot open {self.db_path}: {exc}")
            raise StorageUnavailableError(
                f"Cannot open inventory database at {self.db_path}: {exc}",
                operation=operation,
            ) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as exc:
            LOG.error(f"{operation}: storage failure on {self.db_path}: {exc}")
            raise StorageUnavailableError(
                f"Inventory database failure during {operation}: {exc}",
                operation=operation,
            ) from exc
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        """Create the storage folder and Products table when missing."""
        folder = os.path.dirname(self.db_path)
        if folder:
            try:
                os.makedirs(folder, exist_ok=True)
            except OSError as exc:
                LOG.error(f"Cannot create storage folder {folder}: {exc}")
                raise StorageUnavailableError(
                    f"Cannot create storage folder {folder}: {exc}",
                    operation="ensure_schema",
                ) from exc

        with self.connect("ensure_schema") as conn:
            cur = conn.cursor()
            try:
                cur.execute("PRAGMA journal_mode=WAL;")
            except sqlite3.OperationalError as exc:
                LOG.debug(f"WAL journal mode unavailable, keeping default: {exc}")
            LOG.info("Ensuring inventory schema is present…")
            cur.executescript(SCHEMA_SQL)
            conn.commit()
            LOG.info("Inventory schema ensured.")

    # --------------- Reads ---------------
    @staticmethod
    def _row_to_product(row: sqlite3.Row) -> Product:
        price = row["UnitPrice"]
        quantity = row["Quantity"]
        return Product(
            product_id=none_to_blank(row["ProductID"]),
            product_name=none_to_blank(row["ProductName"]),
            category=none_to_blank(row["Category"]),
            # str() of a float is its shortest round-tripping decimal form
            unit_price=Decimal(str(price)) if price is not None else Decimal("0"),
            quantity=int(quantity) if quantity is not None else 0,
            supplier=none_to_blank(row["Supplier"]),
            status=none_to_blank(row["Status"]),
        )

    def list_all(self) -> List[Product]:
        """Return every product ordered by ProductName (binary collation)."""
        with self.connect("list_all") as conn:
            cur = conn.cursor()
            cur.execute(_SELECT_ALL_SQL)
            products = [self._row_to_product(row) for row in cur.fetchall()]
        LOG.debug(f"Loaded {len(products)} product(s)")
        return products

    # --------------- Writes ---------------
    @staticmethod
    def _require_id(product_id: Any, operation: str) -> str:
        if not isinstance(product_id, str) or not product_id.strip():
            raise InvalidArgumentError("ProductID is required.", operation=operation)
        return product_id

    @classmethod
    def _validate(cls, p: Product, operation: str) -> None:
        if not isinstance(p, Product):
            raise InvalidArgumentError(
                f"Expected a Product, got {type(p).__name__}", operation=operation
            )
        pid = cls._require_id(p.product_id, operation)
        if not isinstance(p.product_name, str) or not p.product_name.strip():
            raise InvalidArgumentError("ProductName is required.", operation=operation, product_id=pid)
        if not price_is_storable(p.unit_price):
            raise InvalidArgumentError(
                f"UnitPrice must be a non-negative number that can be stored exactly (got {p.unit_price!r}).",
                operation=operation,
                product_id=pid,
            )
        if (
            isinstance(p.quantity, bool)
            or not isinstance(p.quantity, int)
            or not 0 <= p.quantity <= MAX_QUANTITY
        ):
            raise InvalidArgumentError(
                f"Quantity must be a non-negative integer no larger than {MAX_QUANTITY} (got {p.quantity!r}).",
                operation=operation,
                product_id=pid,
            )

    @staticmethod
    def _field_params(p: Product) -> Tuple[Any, ...]:
        """ProductName..Status with optional text columns normalised for storage."""
        return (
            p.product_name,
            blank_to_none(p.category),
            float(p.unit_price),
            int(p.quantity),
            blank_to_none(p.supplier),
            blank_to_none(p.status),
        )

    @staticmethod
    def _is_key_violation(exc: sqlite3.IntegrityError) -> bool:
        name = getattr(exc, "sqlite_errorname", None)
        if name:
            return name in ("SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE")
        return "UNIQUE constraint failed" in str(exc)

    def insert(self, p: Product) -> None:
        """Insert a new product; DuplicateKeyError if the ProductID exists."""
        self._validate(p, "insert")
        with self.connect("insert") as conn:
            cur = conn.cursor()
            try:
                cur.execute(_INSERT_SQL, (p.product_id, *self._field_params(p)))
            except sqlite3.IntegrityError as exc:
                if not self._is_key_violation(exc):
                    raise
                LOG.warning(f"Insert rejected, ProductID already exists: {p.product_id}")
                raise DuplicateKeyError(
                    f"ProductID already exists: {p.product_id}",
                    operation="insert",
                    product_id=p.product_id,
                ) from exc
            conn.commit()
        LOG.info(f"Inserted product {p.product_id}")

    def update(self, p: Product) -> None:
        """Overwrite all non-key fields of an existing product."""
        self._validate(p, "update")
        with self.connect("update") as conn:
            cur = conn.cursor()
            cur.execute(_UPDATE_SQL, (*self._field_params(p), p.product_id))
            if cur.rowcount == 0:
                conn.rollback()
                LOG.warning(f"Update matched no rows for ProductID {p.product_id}")
                raise NotFoundError(
                    f"No product found with ProductID {p.product_id}",
                    operation="update",
                    product_id=p.product_id,
                )
            conn.commit()
        LOG.info(f"Updated product {p.product_id}")

    def delete(self, product_id: str) -> None:
        """Permanently remove one product by ProductID."""
        product_id = self._require_id(product_id, "delete")
        with self.connect("delete") as conn:
            cur = conn.cursor()
            cur.execute(_DELETE_SQL, (product_id,))
            if cur.rowcount == 0:
                conn.rollback()
                LOG.warning(f"Delete matched no rows for ProductID {product_id}")
                raise NotFoundError(
                    f"No product found with ProductID {product_id}",
                    operation="delete",
                    product_id=product_id,
                )
            conn.commit()
        LOG.info(f"Deleted product {product_id}")
