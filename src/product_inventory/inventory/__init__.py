"""Product inventory storage package.

Modules:
- db: DB location, schema creation, and CRUD over the Products table
- queries: in-memory category / low-stock / value views over the table
- models: the Product record and optional-field normalisation rules
- parser: raw form/CLI field validation into Product values
- errors: exception taxonomy shared by the modules above
"""

from .db import InventoryDatabase
from .errors import (
    DuplicateKeyError,
    InvalidArgumentError,
    InventoryError,
    NotFoundError,
    StorageUnavailableError,
)
from .models import Product
from .parser import FieldValidationError, parse_product_fields
from .queries import InventoryQueries

__all__ = [
    "InventoryDatabase",
    "InventoryQueries",
    "Product",
    "parse_product_fields",
    "FieldValidationError",
    "InventoryError",
    "DuplicateKeyError",
    "NotFoundError",
    "StorageUnavailableError",
    "InvalidArgumentError",
]
