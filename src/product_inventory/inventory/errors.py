from __future__ import annotations

from typing import Optional


class InventoryError(Exception):
    """Base class for failures raised by the inventory store and queries.

    Carries the operation name and, when known, the offending ProductID so
    callers can render a message without parsing the text.
    """

    def __init__(self, message: str, *, operation: str, product_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.product_id = product_id


class DuplicateKeyError(InventoryError):
    pass


class NotFoundError(InventoryError):
    pass


class StorageUnavailableError(InventoryError):
    pass


class InvalidArgumentError(InventoryError):
    pass
