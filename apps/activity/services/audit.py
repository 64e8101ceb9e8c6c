"""
Audit trail service.

Recording is fire-and-forget: a failure to write an entry is logged and
never propagates to the operation that triggered it.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.access import Action, ensure_allowed

from ..models import ActivityLog, ActivityAction
from .exceptions import InvalidRetentionError

logger = logging.getLogger(__name__)


def log_activity(*, actor, action: str, details: str = '') -> Optional[ActivityLog]:
    """
    Append an audit entry for ``actor``.

    Runs inside its own savepoint so a failed insert cannot poison the
    caller's transaction.

    Args:
        actor: Authenticated user performing the action
        action: ActivityAction value
        details: Free-form description

    Returns:
        The created ActivityLog, or None if nothing was recorded
    """
    if actor is None or not getattr(actor, 'is_authenticated', False):
        return None

    try:
        with transaction.atomic():
            return ActivityLog.objects.create(
                user=actor,
                username=actor.username,
                role=actor.role,
                action=action,
                details=details,
            )
    except Exception:
        logger.exception("Failed to record activity %s for %s", action, actor.username)
        return None


def list_activity(
    *,
    actor,
    search: str = '',
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> QuerySet:
    """
    Return audit entries, newest first.

    Args:
        actor: User requesting the listing (root only)
        search: Case-insensitive match on username, action or details
        date_from: Inclusive lower bound on the entry's local date
        date_to: Inclusive upper bound on the entry's local date
    """
    ensure_allowed(actor, Action.LOG_READ)

    queryset = ActivityLog.objects.all()

    if search:
        queryset = queryset.filter(
            Q(username__icontains=search) |
            Q(action__icontains=search) |
            Q(details__icontains=search)
        )
    if date_from:
        queryset = queryset.filter(timestamp__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(timestamp__date__lte=date_to)

    return queryset.order_by('-timestamp')


@transaction.atomic
def prune_activity(*, actor, older_than_days: Optional[int] = None) -> int:
    """
    Delete audit entries older than the retention window.

    Args:
        actor: User requesting the prune (root only)
        older_than_days: Window in days, defaults to ACTIVITY_LOG_RETENTION_DAYS

    Returns:
        Number of deleted entries

    Raises:
        InvalidRetentionError: If the window is not positive
    """
    ensure_allowed(actor, Action.LOG_PRUNE)

    if older_than_days is None:
        older_than_days = settings.ACTIVITY_LOG_RETENTION_DAYS
    if older_than_days <= 0:
        raise InvalidRetentionError("Retention window must be at least one day")

    cutoff = timezone.now() - timedelta(days=older_than_days)
    deleted, _ = ActivityLog.objects.filter(timestamp__lt=cutoff).delete()

    log_activity(
        actor=actor,
        action=ActivityAction.PRUNE_LOGS,
        details=f"Pruned {deleted} entries older than {older_than_days} days",
    )
    return deleted
