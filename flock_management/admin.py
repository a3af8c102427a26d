"""
Admin interface for flock profiles, batches and mortality records.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import FlockProfile, FlockBatch, MortalityRecord


# =============================================================================
# FLOCK PROFILE ADMIN
# =============================================================================

@admin.register(FlockProfile)
class FlockProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'hens', 'roosters', 'chicks', 'brooding', 'total_birds', 'flock_start_date']
    search_fields = ['user__username', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']


# =============================================================================
# FLOCK BATCH ADMIN
# =============================================================================

class MortalityRecordInline(admin.TabularInline):
    model = MortalityRecord
    extra = 0
    fields = ['date', 'count', 'cause', 'description']
    ordering = ['-date']


@admin.register(FlockBatch)
class FlockBatchAdmin(admin.ModelAdmin):
    """
    Admin interface for flock batches.
    """

    list_display = [
        'batch_name', 'user', 'batch_type', 'breed', 'acquisition_date',
        'initial_count', 'current_count', 'survival_badge', 'is_active'
    ]

    list_filter = ['is_active', 'batch_type', 'age_at_acquisition', 'acquisition_date']

    search_fields = ['batch_name', 'breed', 'source', 'user__username', 'user__email']

    readonly_fields = ['id', 'current_count', 'created_at', 'updated_at']

    fieldsets = [
        ('Batch Identification', {
            'fields': ['id', 'user', 'batch_name', 'breed', 'batch_type', 'age_at_acquisition', 'source']
        }),
        ('Acquisition', {
            'fields': [
                'acquisition_date', 'initial_count',
                'hens_count', 'roosters_count', 'chicks_count', 'brooding_count'
            ]
        }),
        ('Current Status', {
            'fields': ['current_count', 'is_active']
        }),
        ('Notes', {
            'fields': ['notes'],
            'classes': ['collapse']
        }),
        ('Metadata', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse']
        }),
    ]

    inlines = [MortalityRecordInline]

    def survival_badge(self, obj):
        """Display survival rate with color coding"""
        if not obj.initial_count:
            return '-'
        rate = obj.current_count / obj.initial_count * 100
        if rate >= 95:
            color = 'green'
        elif rate >= 85:
            color = 'orange'
        else:
            color = 'red'
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}%</span>',
            color,
            f'{rate:.1f}'
        )
    survival_badge.short_description = 'Survival'


# =============================================================================
# MORTALITY RECORD ADMIN
# =============================================================================

@admin.register(MortalityRecord)
class MortalityRecordAdmin(admin.ModelAdmin):
    list_display = ['batch', 'date', 'count', 'cause', 'user']
    list_filter = ['cause', 'date']
    search_fields = ['batch__batch_name', 'description', 'user__username']
    readonly_fields = ['id', 'created_at']
    date_hierarchy = 'date'
