"""Domain-specific exceptions for share-link services."""


class SharingServiceError(Exception):
    """Base exception for share-link services."""
    pass


class ShareLinkNotFoundError(SharingServiceError):
    """Raised when a token matches no share link."""
    pass


class ShareLinkExpiredError(SharingServiceError):
    """Raised when a share link is past its expiry."""
    pass


class InvalidShareDurationError(SharingServiceError):
    """Raised when a link duration is not a positive number of hours."""
    pass
