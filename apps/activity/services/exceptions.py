"""Domain-specific exceptions for activity services."""


class ActivityServiceError(Exception):
    """Base exception for activity services."""
    pass


class InvalidRetentionError(ActivityServiceError):
    """Raised when a pruning window is not a positive number of days."""
    pass
