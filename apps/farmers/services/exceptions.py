"""Domain-specific exceptions for farmer services."""


class FarmerServiceError(Exception):
    """Base exception for farmer services."""
    pass


class FarmerNotFoundError(FarmerServiceError):
    """Raised when a farmer does not exist."""
    pass


class InvalidFarmerDataError(FarmerServiceError):
    """Raised when farmer data is invalid (e.g. blank name)."""
    pass
