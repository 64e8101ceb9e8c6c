"""Domain-specific exceptions for pricing services."""


class PricingServiceError(Exception):
    """Base exception for pricing services."""
    pass


class PriceEntryNotFoundError(PricingServiceError):
    """Raised when a price entry does not exist."""
    pass


class InvalidPriceError(PricingServiceError):
    """Raised when a price is negative or missing."""
    pass
