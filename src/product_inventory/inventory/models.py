from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Write-side rule for optional text columns: "" is stored as NULL."""
    if value is None or value == "":
        return None
    return value


def none_to_blank(value: Optional[str]) -> str:
    """Read-side rule for optional text columns: NULL is read as ""."""
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Product:
    product_id: str
    product_name: str
    category: str = ""
    unit_price: Decimal = Decimal("0")
    quantity: int = 0
    supplier: str = ""
    status: str = ""

    @property
    def line_value(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["unit_price"] = str(self.unit_price)
        return data


def price_is_storable(value: Decimal) -> bool:
    """True when `value` survives the REAL UnitPrice column unchanged.

    Finite, non-negative, and equal to itself after a float round trip,
    which rules out prices needing more than ~15 significant digits as
    well as magnitudes that overflow to infinity.
    """
    if not isinstance(value, Decimal) or not value.is_finite() or value < 0:
        return False
    as_float = float(value)
    if as_float in (float("inf"), float("-inf")):
        return False
    return Decimal(str(as_float)) == value
