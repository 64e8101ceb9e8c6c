from django.contrib import admin

from .models import Farmer


@admin.register(Farmer)
class FarmerAdmin(admin.ModelAdmin):
    list_display = ['name', 'plate_count', 'updated_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']

    def plate_count(self, obj):
        return len(obj.license_plates or [])
    plate_count.short_description = 'Plates'
