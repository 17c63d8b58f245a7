"""Error taxonomy shared by the repositories, the sale coordinator and the API.

Caller mistakes (``ValidationError``, ``NotFoundError``,
``InsufficientStockError``) are never retried. ``StorageError`` and
``NotReadyError`` are not the caller's fault and may be retried.
"""


class StationeryError(Exception):
    """Base class for every error raised by the core."""

    def context(self) -> dict:
        return {}


class ValidationError(StationeryError):
    """Raised for malformed, missing or negative input."""


class NotFoundError(StationeryError):
    """Raised when a referenced identifier does not exist."""

    def __init__(self, entity: str, identifier=None):
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            message = f"{entity.capitalize()} not found"
        else:
            message = f"{entity.capitalize()} {identifier} not found"
        super().__init__(message)

    def context(self) -> dict:
        return {"entity": self.entity, "id": self.identifier}


class InsufficientStockError(StationeryError):
    """Raised when a sale asks for more units than are on hand."""

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock! Available: {available}")

    def context(self) -> dict:
        return {
            "product_id": self.product_id,
            "requested": self.requested,
            "available": self.available,
        }


class StorageError(StationeryError):
    """Raised when the persistence layer fails; the unit of work was rolled back."""

    def __init__(self, message: str, **context):
        self._context = context
        super().__init__(message)

    def context(self) -> dict:
        return dict(self._context)


class NotReadyError(StationeryError):
    """Raised for requests issued before storage initialization succeeded."""


__all__ = [
    "InsufficientStockError",
    "NotFoundError",
    "NotReadyError",
    "StationeryError",
    "StorageError",
    "ValidationError",
]
