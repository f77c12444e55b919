# repairshop/core/errors.py
"""Errors raised by the service layer.

Routes never catch these; the handler registered in ``repairshop.main`` turns
them into ``{"detail": ...}`` responses with the class' status code.
"""


class RepairShopError(Exception):
    status_code = 500
    default_detail = "Unexpected error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(RepairShopError):
    """Missing or invalid intake/edit fields."""

    status_code = 422
    default_detail = "Invalid ticket data"

    def __init__(self, detail: str | None = None, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(detail)


class NotFoundError(RepairShopError):
    status_code = 404
    default_detail = "Ticket not found"


class ConflictError(RepairShopError):
    """The ticket changed since the caller last read it."""

    status_code = 409
    default_detail = "Ticket was modified by someone else, reload and try again"


class PersistenceError(RepairShopError):
    status_code = 500
    default_detail = "Could not save changes, please try again"


__all__ = [
    "RepairShopError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "PersistenceError",
]
