from django.db import models
import uuid


class ActivityAction(models.TextChoices):
    LOGIN = 'LOGIN', 'Login'
    LOGOUT = 'LOGOUT', 'Logout'
    ADD_BILL = 'ADD_BILL', 'Add bill'
    UPDATE_BILL = 'UPDATE_BILL', 'Update bill'
    DELETE_BILL = 'DELETE_BILL', 'Delete bill'
    CREATE_USER = 'CREATE_USER', 'Create user'
    UPDATE_USER = 'UPDATE_USER', 'Update user'
    DELETE_USER = 'DELETE_USER', 'Delete user'
    ADD_FARMER = 'ADD_FARMER', 'Add farmer'
    UPDATE_FARMER = 'UPDATE_FARMER', 'Update farmer'
    DELETE_FARMER = 'DELETE_FARMER', 'Delete farmer'
    UPDATE_SETTINGS = 'UPDATE_SETTINGS', 'Update settings'
    ADD_PRICE_CONFIG = 'ADD_PRICE_CONFIG', 'Add price config'
    UPDATE_PRICE_CONFIG = 'UPDATE_PRICE_CONFIG', 'Update price config'
    DELETE_PRICE_CONFIG = 'DELETE_PRICE_CONFIG', 'Delete price config'
    CREATE_SHARE_LINK = 'CREATE_SHARE_LINK', 'Create share link'
    PRUNE_LOGS = 'PRUNE_LOGS', 'Prune activity logs'


class ActivityLog(models.Model):
    """Append-only audit trail entry."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Snapshot of the actor; the FK is cleared if the user is deleted
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activity_logs'
    )
    username = models.CharField(max_length=150)
    role = models.CharField(max_length=10)

    action = models.CharField(max_length=32, choices=ActivityAction.choices)
    details = models.TextField(blank=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'activity_logs'
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.timestamp:%Y-%m-%d %H:%M} {self.username} {self.action}"
