from django.contrib import admin

from .models import Bill


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = [
        'bill_number',
        'date',
        'owner_name',
        'sugarcane_type',
        'weight',
        'price_per_unit',
        'net_amount',
    ]
    list_filter = ['sugarcane_type', 'date']
    search_fields = ['bill_number', 'owner_name', 'quota_number']
    date_hierarchy = 'date'
    readonly_fields = [
        'price_per_unit',
        'total_amount',
        'net_amount',
        'created_by',
        'created_at',
        'updated_at',
    ]
