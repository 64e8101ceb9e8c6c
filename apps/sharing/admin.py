from django.contrib import admin

from .models import ShareLink


@admin.register(ShareLink)
class ShareLinkAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'created_by', 'created_at', 'expires_at']
    readonly_fields = ['token', 'created_by', 'created_at']
