"""
Feed Inventory Admin Configuration

Admin interface for recording feed bags and marking them depleted.
"""

from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.html import format_html
from .models import FeedBag


@admin.register(FeedBag)
class FeedBagAdmin(admin.ModelAdmin):
    """Admin interface for Feed Bags."""

    list_display = [
        'brand',
        'feed_type',
        'user',
        'quantity_display',
        'total_cost',
        'opened_date',
        'depleted_date',
        'status_badge',
    ]

    list_filter = [
        'unit',
        'opened_date',
        'depleted_date',
    ]

    search_fields = [
        'brand',
        'feed_type',
        'batch_number',
        'user__username',
    ]

    readonly_fields = ['id', 'created_at', 'updated_at']

    date_hierarchy = 'opened_date'

    actions = ['mark_depleted_today']

    fieldsets = (
        ('Feed Information', {
            'fields': ('id', 'user', 'brand', 'feed_type', 'batch_number', 'description')
        }),
        ('Quantity & Pricing', {
            'fields': ('quantity', 'unit', 'price_per_unit', 'total_cost')
        }),
        ('Lifecycle', {
            'fields': ('opened_date', 'depleted_date')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def quantity_display(self, obj):
        return f"{obj.quantity} {obj.unit}"
    quantity_display.short_description = 'Quantity'

    def status_badge(self, obj):
        """Display whether the bag is still in use."""
        if obj.is_depleted:
            return format_html('<span style="color: {};">●</span> {}', 'gray', 'Depleted')
        return format_html('<span style="color: {};">●</span> {}', 'green', 'In use')
    status_badge.short_description = 'Status'

    @admin.action(description='Mark selected bags as depleted today')
    def mark_depleted_today(self, request, queryset):
        today = timezone.now().date()
        updated = 0
        for bag in queryset.filter(depleted_date__isnull=True):
            try:
                bag.mark_depleted(today)
            except ValidationError as e:
                self.message_user(request, f"{bag}: {e.messages[0]}", level=messages.ERROR)
                continue
            updated += 1
        self.message_user(request, f"{updated} feed bag(s) marked as depleted.")
