from __future__ import annotations

import argparse
import json
import sys
from typing import Callable, List, Sequence

from ..config import load_low_stock_threshold
from ..inventory import (
    DuplicateKeyError,
    InvalidArgumentError,
    InventoryDatabase,
    InventoryError,
    InventoryQueries,
    NotFoundError,
    Product,
    StorageUnavailableError,
    parse_product_fields,
)
from ..inventory.constants import STATUS_CHOICES
from ..logging import configure_logging, get_logger

LOG = get_logger("cli-main")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INVALID = 2
EXIT_STORAGE = 3

_HEADERS = ("ProductID", "ProductName", "Category", "UnitPrice", "Quantity", "Supplier", "Status")


def _print_products(products: List[Product], as_json: bool) -> None:
    if as_json:
        print(json.dumps([p.to_dict() for p in products], ensure_ascii=False))
        return
    rows = [
        (p.product_id, p.product_name, p.category, f"{p.unit_price:.2f}", str(p.quantity), p.supplier, p.status)
        for p in products
    ]
    widths = [max([len(h)] + [len(r[i]) for r in rows]) for i, h in enumerate(_HEADERS)]
    print("  ".join(h.ljust(w) for h, w in zip(_HEADERS, widths)))
    for r in rows:
        print("  ".join(c.ljust(w) for c, w in zip(r, widths)))
    print(f"({len(rows)} product(s))")


def _add_product_fields(p: argparse.ArgumentParser) -> None:
    p.add_argument("product_id", help="ProductID (primary key)")
    p.add_argument("--name", required=True, help="ProductName")
    p.add_argument("--category", default="")
    p.add_argument("--price", required=True, help="UnitPrice, non-negative decimal")
    p.add_argument("--quantity", required=True, help="Quantity, non-negative integer")
    p.add_argument("--supplier", default="")
    p.add_argument(
        "--status",
        default="",
        help=f"Free-form status label (usually one of: {', '.join(STATUS_CHOICES)})",
    )


def _product_from_args(ns: argparse.Namespace) -> Product:
    return parse_product_fields(
        ns.product_id,
        ns.name,
        category=ns.category,
        unit_price=ns.price,
        quantity=ns.quantity,
        supplier=ns.supplier,
        status=ns.status,
    )


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _run(handler: Callable[[argparse.Namespace], int], ns: argparse.Namespace) -> int:
    try:
        return handler(ns)
    except (DuplicateKeyError, NotFoundError) as exc:
        LOG.error(f"{exc.operation} rejected: {exc}")
        return EXIT_REJECTED
    except InvalidArgumentError as exc:
        LOG.error(f"Invalid input: {exc}")
        return EXIT_INVALID
    except StorageUnavailableError as exc:
        LOG.error(f"Storage unavailable: {exc}")
        return EXIT_STORAGE
    except InventoryError as exc:
        LOG.error(f"{exc.operation} failed: {exc}")
        return EXIT_REJECTED


def main(argv: Sequence[str] | None = None) -> int:
    provided = list(argv) if argv is not None else sys.argv[1:]
    LOG.debug(f"CLI invoked with arguments: {provided}")

    parser = argparse.ArgumentParser(
        prog="product-inventory",
        description="Manage the product inventory database.",
    )
    parser.add_argument("--db", help="Path to the SQLite file (overrides INVENTORY_DB_PATH)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", help="Override LOG_LEVEL for this run (DEBUG, INFO, WARNING, ...)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def _open(ns: argparse.Namespace) -> InventoryDatabase:
        return InventoryDatabase(ns.db)

    init_cmd = subparsers.add_parser("init", help="Create/ensure the inventory DB schema exists")
    def _init(ns: argparse.Namespace) -> int:
        db = _open(ns)
        LOG.info(f"Inventory DB ready at: {db.db_path}")
        print(db.db_path)
        return EXIT_OK
    init_cmd.set_defaults(handler=_init)

    list_cmd = subparsers.add_parser("list", help="List all products ordered by name")
    def _list(ns: argparse.Namespace) -> int:
        _print_products(_open(ns).list_all(), ns.json)
        return EXIT_OK
    list_cmd.set_defaults(handler=_list)

    add_cmd = subparsers.add_parser("add", help="Insert a new product")
    _add_product_fields(add_cmd)
    def _add(ns: argparse.Namespace) -> int:
        product = _product_from_args(ns)
        _open(ns).insert(product)
        print(f"Product saved: {product.product_id}")
        return EXIT_OK
    add_cmd.set_defaults(handler=_add)

    update_cmd = subparsers.add_parser("update", help="Overwrite every field of an existing product")
    _add_product_fields(update_cmd)
    def _update(ns: argparse.Namespace) -> int:
        product = _product_from_args(ns)
        _open(ns).update(product)
        print(f"Product updated: {product.product_id}")
        return EXIT_OK
    update_cmd.set_defaults(handler=_update)

    delete_cmd = subparsers.add_parser("delete", help="Permanently delete a product")
    delete_cmd.add_argument("product_id")
    delete_cmd.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    def _delete(ns: argparse.Namespace) -> int:
        pid = ns.product_id.strip()
        if not pid:
            raise InvalidArgumentError("ProductID is required.", operation="delete")
        if not ns.yes and not _confirm(f"Delete product {pid}?"):
            LOG.info(f"Delete of {pid} cancelled by user")
            return EXIT_OK
        _open(ns).delete(pid)
        print(f"Product deleted: {pid}")
        return EXIT_OK
    delete_cmd.set_defaults(handler=_delete)

    cat_cmd = subparsers.add_parser("category", help="List products in a category (all when omitted)")
    cat_cmd.add_argument("name", nargs="?", default="")
    def _category(ns: argparse.Namespace) -> int:
        _print_products(InventoryQueries(_open(ns)).by_category(ns.name), ns.json)
        return EXIT_OK
    cat_cmd.set_defaults(handler=_category)

    low_cmd = subparsers.add_parser("low-stock", help="List products at or below a quantity threshold")
    low_cmd.add_argument("--threshold", type=int, help="Defaults to INVENTORY_LOW_STOCK_THRESHOLD or 5")
    def _low(ns: argparse.Namespace) -> int:
        threshold = ns.threshold if ns.threshold is not None else load_low_stock_threshold()
        _print_products(InventoryQueries(_open(ns)).low_stock(threshold), ns.json)
        return EXIT_OK
    low_cmd.set_defaults(handler=_low)

    value_cmd = subparsers.add_parser("value", help="Print the total inventory value")
    def _value(ns: argparse.Namespace) -> int:
        total = InventoryQueries(_open(ns)).total_inventory_value()
        if ns.json:
            print(json.dumps({"total_inventory_value": str(total)}))
        else:
            print(f"{total:.2f}")
        return EXIT_OK
    value_cmd.set_defaults(handler=_value)

    args = parser.parse_args(provided)
    if args.log_level:
        configure_logging(args.log_level)
    code = _run(args.handler, args)
    LOG.debug(f"Subcommand '{args.command}' finished with exit code {code}.")
    return code


if __name__ == "__main__":
    sys.exit(main())
