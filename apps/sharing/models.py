from django.db import models
from django.utils import timezone
import uuid


class ShareLink(models.Model):
    """
    Opaque token granting anonymous read-only access to the bill listing.

    A null ``expires_at`` means the link never expires.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    token = models.CharField(max_length=128, unique=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='share_links'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'share_links'
        ordering = ['-created_at']

    def __str__(self):
        return f"Share link {self.token[:8]}..."

    @property
    def is_expired(self):
        return self.expires_at is not None and timezone.now() > self.expires_at
