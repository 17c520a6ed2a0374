from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..logging import get_logger
from .errors import InvalidArgumentError
from .constants import MAX_QUANTITY
from .models import Product, price_is_storable


LOG = get_logger("inventory-parser")


class FieldValidationError(InvalidArgumentError):
    """Raised when a raw form/CLI field cannot become a Product value."""

    def __init__(self, field: str, message: str, *, product_id: Optional[str] = None) -> None:
        super().__init__(message, operation="parse", product_id=product_id)
        self.field = field


def _text(v: Any) -> str:
    return str(v).strip() if v is not None else ""


def parse_price(raw: Any) -> Decimal:
    s = _text(raw)
    try:
        value = Decimal(s)
    except InvalidOperation:
        raise FieldValidationError("unit_price", "UnitPrice must be a non-negative number.") from None
    if not value.is_finite() or value < 0:
        raise FieldValidationError("unit_price", "UnitPrice must be a non-negative number.")
    if not price_is_storable(value):
        raise FieldValidationError("unit_price", "UnitPrice is too large or too precise to store exactly.")
    return value


def parse_quantity(raw: Any) -> int:
    s = _text(raw)
    try:
        value = int(s)
    except ValueError:
        raise FieldValidationError("quantity", "Quantity must be a non-negative integer.") from None
    if value < 0:
        raise FieldValidationError("quantity", "Quantity must be a non-negative integer.")
    if value > MAX_QUANTITY:
        raise FieldValidationError("quantity", f"Quantity must not exceed {MAX_QUANTITY}.")
    return value


def parse_product_fields(
    product_id: Any,
    product_name: Any,
    *,
    category: Any = None,
    unit_price: Any = None,
    quantity: Any = None,
    supplier: Any = None,
    status: Any = None,
) -> Product:
    """Validate raw text fields and build a Product.

    - Every field is trimmed; missing optional fields become "".
    - ProductID and ProductName are required.
    - UnitPrice must parse as a non-negative decimal, Quantity as a
      non-negative integer. Both are required, as on the entry form.
    """
    pid = _text(product_id)
    if not pid:
        raise FieldValidationError("product_id", "ProductID is required.")
    name = _text(product_name)
    if not name:
        raise FieldValidationError("product_name", "ProductName is required.", product_id=pid)
    try:
        price = parse_price(unit_price)
        qty = parse_quantity(quantity)
    except FieldValidationError as exc:
        exc.product_id = pid
        LOG.debug(f"Rejected {exc.field} for {pid}: {exc}")
        raise
    return Product(
        product_id=pid,
        product_name=name,
        category=_text(category),
        unit_price=price,
        quantity=qty,
        supplier=_text(supplier),
        status=_text(status),
    )
