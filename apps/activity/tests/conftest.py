import pytest
from datetime import timedelta
from django.utils import timezone

from apps.activity.models import ActivityLog, ActivityAction


@pytest.fixture
def activity_entries(db, admin_user, root_user):
    """Three entries: two recent, one ten days old."""
    recent_login = ActivityLog.objects.create(
        user=admin_user, username='admin', role='admin',
        action=ActivityAction.LOGIN, details='User logged in',
    )
    recent_bill = ActivityLog.objects.create(
        user=root_user, username='root', role='root',
        action=ActivityAction.ADD_BILL, details='Added bill B-7 for Somchai',
    )
    old = ActivityLog.objects.create(
        user=admin_user, username='admin', role='admin',
        action=ActivityAction.LOGOUT, details='User logged out',
    )
    ActivityLog.objects.filter(pk=old.pk).update(timestamp=timezone.now() - timedelta(days=10))
    old.refresh_from_db()
    return [recent_login, recent_bill, old]
