# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.

    Provides user management including:
    - User listing with role and super-root badges
    - Filtering by role and status
    - Search by username
    """

    list_display = [
        'username',
        'role_badge',
        'is_super_root',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_super_root',
        'is_active',
        'created_at',
    ]

    search_fields = ['username']

    ordering = ['username']

    fieldsets = (
        ('Basic Information', {
            'fields': ('username', 'password', 'role')
        }),
        ('Permissions', {
            'fields': ('is_super_root', 'is_active', 'is_staff', 'is_superuser'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('username', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'is_super_root',
        'created_at',
        'last_login',
    ]

    filter_horizontal = []

    def role_badge(self, obj):
        """Display role as colored badge."""
        color = '#A47449' if obj.is_root else '#6B8E5E'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def has_delete_permission(self, request, obj=None):
        """The super root cannot be deleted, not even here."""
        if obj is not None and obj.is_super_root:
            return False
        return super().has_delete_permission(request, obj)
