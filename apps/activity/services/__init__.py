"""Activity app services layer."""

from .exceptions import ActivityServiceError, InvalidRetentionError
from .audit import log_activity, list_activity, prune_activity

__all__ = [
    # Exceptions
    'ActivityServiceError',
    'InvalidRetentionError',
    # Services
    'log_activity',
    'list_activity',
    'prune_activity',
]
