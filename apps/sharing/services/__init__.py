"""Sharing app services layer."""

from .exceptions import (
    SharingServiceError,
    ShareLinkNotFoundError,
    ShareLinkExpiredError,
    InvalidShareDurationError,
)
from .share_links import generate_token, issue_share_link, validate_share_link

__all__ = [
    # Exceptions
    'SharingServiceError',
    'ShareLinkNotFoundError',
    'ShareLinkExpiredError',
    'InvalidShareDurationError',
    # Services
    'generate_token',
    'issue_share_link',
    'validate_share_link',
]
