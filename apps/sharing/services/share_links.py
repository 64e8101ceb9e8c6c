"""
Share-link service.

Links grant read-only access to the bill listing. Tokens are random hex
strings from ``secrets``; a link without ``expires_at`` lasts forever.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.access import Action, ensure_allowed
from apps.activity.models import ActivityAction
from apps.activity.services import log_activity

from ..models import ShareLink
from .exceptions import (
    ShareLinkNotFoundError,
    ShareLinkExpiredError,
    InvalidShareDurationError,
)

logger = logging.getLogger(__name__)


def generate_token() -> str:
    """Generate an opaque hex token."""
    return secrets.token_hex(settings.SHARE_TOKEN_BYTES)


@transaction.atomic
def issue_share_link(*, actor, duration_hours: Optional[int] = None) -> ShareLink:
    """
    Issue a new share link.

    Args:
        actor: User issuing the link (admin or root)
        duration_hours: Lifetime in hours, or None for a permanent link

    Returns:
        Created ShareLink

    Raises:
        InvalidShareDurationError: If duration_hours is not positive or exceeds
            SHARE_MAX_DURATION_HOURS
        RuntimeError: If a unique token could not be generated
    """
    ensure_allowed(actor, Action.SHARE_CREATE)

    if duration_hours is not None and duration_hours <= 0:
        raise InvalidShareDurationError("Duration must be a positive number of hours")
    if duration_hours is not None and duration_hours > settings.SHARE_MAX_DURATION_HOURS:
        raise InvalidShareDurationError(
            f"Duration cannot exceed {settings.SHARE_MAX_DURATION_HOURS} hours"
        )

    expires_at = None
    if duration_hours is not None:
        expires_at = timezone.now() + timedelta(hours=duration_hours)

    # Retry on the (very unlikely) token collision
    max_attempts = 5
    for _ in range(max_attempts):
        try:
            with transaction.atomic():
                link = ShareLink.objects.create(
                    token=generate_token(),
                    expires_at=expires_at,
                    created_by=actor,
                )
            break
        except IntegrityError:
            continue
    else:
        raise RuntimeError("Failed to generate unique share token")

    lifetime = f"{duration_hours} hours" if duration_hours is not None else 'forever'
    log_activity(
        actor=actor,
        action=ActivityAction.CREATE_SHARE_LINK,
        details=f"Created share link valid for {lifetime}",
    )
    logger.info("Share link issued by %s (%s)", actor.username, lifetime)
    return link


def validate_share_link(*, token: str) -> ShareLink:
    """
    Look up a token and check it has not expired.

    Raises:
        ShareLinkNotFoundError: If no link has this token
        ShareLinkExpiredError: If the link has expired
    """
    try:
        link = ShareLink.objects.get(token=token)
    except ShareLink.DoesNotExist:
        raise ShareLinkNotFoundError("Link not found")

    if link.is_expired:
        raise ShareLinkExpiredError("Link expired")

    return link
