"""
Service layer tests for share links.

Tests cover:
- Token issuance and expiry computation
- Validation of unknown, expired and permanent links
- Token collision retry
"""

import pytest
from datetime import timedelta
from unittest.mock import patch

from django.utils import timezone

from apps.accounts.services.exceptions import AccessDeniedError
from apps.activity.models import ActivityLog, ActivityAction
from apps.sharing.models import ShareLink
from apps.sharing.services import issue_share_link, validate_share_link
from apps.sharing.services.exceptions import (
    ShareLinkNotFoundError,
    ShareLinkExpiredError,
    InvalidShareDurationError,
)


@pytest.mark.django_db
class TestIssueShareLink:
    """Tests for issue_share_link."""

    def test_timed_link(self, admin_user):
        """A timed link expires after the given hours."""
        before = timezone.now()
        link = issue_share_link(actor=admin_user, duration_hours=24)

        assert len(link.token) == 32
        assert int(link.token, 16) >= 0
        assert before + timedelta(hours=24) <= link.expires_at <= timezone.now() + timedelta(hours=24)
        assert ActivityLog.objects.filter(action=ActivityAction.CREATE_SHARE_LINK).count() == 1

    def test_permanent_link(self, root_user):
        """No duration means the link never expires."""
        link = issue_share_link(actor=root_user)

        assert link.expires_at is None

    def test_tokens_are_unique(self, admin_user):
        """Each issued link gets a fresh token."""
        first = issue_share_link(actor=admin_user)
        second = issue_share_link(actor=admin_user)

        assert first.token != second.token

    def test_non_positive_duration(self, admin_user):
        """Zero or negative durations are rejected."""
        with pytest.raises(InvalidShareDurationError):
            issue_share_link(actor=admin_user, duration_hours=0)

        assert ShareLink.objects.count() == 0

    def test_duration_beyond_limit(self, admin_user, settings):
        """A lifetime past the configured maximum is rejected before any date math."""
        settings.SHARE_MAX_DURATION_HOURS = 48

        with pytest.raises(InvalidShareDurationError):
            issue_share_link(actor=admin_user, duration_hours=100000000)

        assert ShareLink.objects.count() == 0

    def test_duration_at_limit(self, admin_user, settings):
        settings.SHARE_MAX_DURATION_HOURS = 48

        link = issue_share_link(actor=admin_user, duration_hours=48)

        assert link.expires_at is not None

    def test_anonymous_denied(self):
        """Anonymous callers cannot issue links."""
        with pytest.raises(AccessDeniedError):
            issue_share_link(actor=None)

    @pytest.mark.django_db(transaction=True)
    def test_gives_up_after_repeated_collisions(self, admin_user):
        """Repeated token collisions surface as an error."""
        ShareLink.objects.create(token='dup')

        with patch('apps.sharing.services.share_links.generate_token', return_value='dup'):
            with pytest.raises(RuntimeError, match="Failed to generate unique share token"):
                issue_share_link(actor=admin_user)


@pytest.mark.django_db
class TestValidateShareLink:
    """Tests for validate_share_link."""

    def test_active(self, active_link):
        """An unexpired link validates."""
        assert validate_share_link(token=active_link.token) == active_link

    def test_permanent(self, permanent_link):
        """A permanent link always validates."""
        assert validate_share_link(token=permanent_link.token) == permanent_link

    def test_unknown(self):
        """Unknown tokens raise ShareLinkNotFoundError."""
        with pytest.raises(ShareLinkNotFoundError):
            validate_share_link(token='nope')

    def test_expired(self, expired_link):
        """Expired links raise ShareLinkExpiredError."""
        with pytest.raises(ShareLinkExpiredError):
            validate_share_link(token=expired_link.token)
