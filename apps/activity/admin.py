from django.contrib import admin

from .models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    """Read-only admin view of the audit trail."""

    list_display = ['timestamp', 'username', 'role', 'action', 'details']
    list_filter = ['action', 'role', 'timestamp']
    search_fields = ['username', 'details']
    date_hierarchy = 'timestamp'
    ordering = ['-timestamp']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
