from django.contrib import admin

from .models import PriceEntry, PriceSetting


@admin.register(PriceEntry)
class PriceEntryAdmin(admin.ModelAdmin):
    list_display = ['effective_date', 'fresh_price', 'burnt_price', 'long_top_price', 'updated_at']
    date_hierarchy = 'effective_date'
    ordering = ['-effective_date']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(PriceSetting)
class PriceSettingAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'fresh_price', 'burnt_price', 'long_top_price']
