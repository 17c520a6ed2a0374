from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from product_inventory.inventory import (
    InvalidArgumentError,
    InventoryDatabase,
    InventoryQueries,
    Product,
)


def _seed_database(tmp_path: Path) -> InventoryQueries:
    db = InventoryDatabase(str(tmp_path / "Product.db"))
    db.insert(Product("P1", "Widget", "Tools", Decimal("9.99"), 3, "Acme", "Active"))
    db.insert(Product("P2", "Gadget", "Tools", Decimal("19.99"), 0, "", ""))
    return InventoryQueries(db)


def test_example_scenario(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)

    assert queries.total_inventory_value() == Decimal("29.97")
    assert [p.product_id for p in queries.low_stock(0)] == ["P2"]
    assert [p.product_name for p in queries.by_category("tools")] == ["Gadget", "Widget"]


def test_total_value_is_exact_and_zero_when_empty(tmp_path: Path) -> None:
    db = InventoryDatabase(str(tmp_path / "Product.db"))
    queries = InventoryQueries(db)
    assert queries.total_inventory_value() == Decimal("0")

    for i in range(10):
        db.insert(Product(f"C{i}", f"Coin {i}", unit_price=Decimal("0.10"), quantity=3))
    # float arithmetic would drift here
    assert queries.total_inventory_value() == Decimal("3.00")


def test_by_category_blank_returns_everything(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)
    queries.db.insert(Product("P3", "Anvil", "", Decimal("50"), 1))

    for blank in ("", None, "  "):
        assert [p.product_id for p in queries.by_category(blank)] == ["P3", "P2", "P1"]


def test_by_category_matches_case_insensitively(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)
    queries.db.insert(Product("P3", "Apron", "TOOLS", Decimal("5"), 2))
    queries.db.insert(Product("P4", "Bolt", "Hardware", Decimal("0.05"), 500))

    assert [p.product_id for p in queries.by_category("Tools")] == ["P3", "P2", "P1"]
    assert [p.product_id for p in queries.by_category("hardware")] == ["P4"]
    assert queries.by_category("Garden") == []


def test_low_stock_sorted_by_quantity_with_stable_ties(tmp_path: Path) -> None:
    db = InventoryDatabase(str(tmp_path / "Product.db"))
    db.insert(Product("A", "Zeta", quantity=2))
    db.insert(Product("B", "Alpha", quantity=5))
    db.insert(Product("C", "Mid", quantity=2))
    db.insert(Product("D", "Big", quantity=6))
    queries = InventoryQueries(db)

    # ties (quantity 2) keep list_all's name order: Mid before Zeta
    assert [p.product_id for p in queries.low_stock(5)] == ["C", "A", "B"]
    assert queries.low_stock(-1) == []


def test_queries_see_fresh_data(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)
    assert len(queries.by_category("")) == 2

    queries.db.delete("P1")
    assert [p.product_id for p in queries.by_category("")] == ["P2"]
    assert queries.total_inventory_value() == Decimal("0")


def test_low_stock_requires_integer_threshold(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)
    with pytest.raises(InvalidArgumentError):
        queries.low_stock("5")  # type: ignore[arg-type]


def test_by_category_ignores_padding_on_stored_categories(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)
    queries.db.insert(Product("P3", "Apron", " Tools ", Decimal("5"), 2))

    assert [p.product_id for p in queries.by_category("Tools")] == ["P3", "P2", "P1"]


def test_total_value_stays_computable_after_rejected_huge_price(tmp_path: Path) -> None:
    queries = _seed_database(tmp_path)
    with pytest.raises(InvalidArgumentError):
        queries.db.insert(Product("H1", "Huge", unit_price=Decimal("1e400"), quantity=0))

    assert queries.total_inventory_value() == Decimal("29.97")
