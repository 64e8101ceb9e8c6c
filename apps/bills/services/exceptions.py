"""Domain-specific exceptions for bill services."""


class BillServiceError(Exception):
    """Base exception for bill services."""
    pass


class BillNotFoundError(BillServiceError):
    """Raised when a bill does not exist."""
    pass


class DuplicateBillNumberError(BillServiceError):
    """Raised when a bill number is already taken."""
    pass


class InvalidBillDataError(BillServiceError):
    """Raised when bill data is invalid (unknown cane type, negative amounts)."""
    pass
