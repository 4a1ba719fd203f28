"""
Read-only admin view of the change trail
"""

import json

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from audit.models import AuditEntry


@admin.register(AuditEntry)
class AuditEntryAdmin(admin.ModelAdmin):
    """Browse entries by owner, action and record; before/after shown as JSON"""
    
    list_display = [
        'id',
        'timestamp',
        'owner_link',
        'action',
        'entity_type',
        'entity_id',
        'description_short',
        'ip_address'
    ]
    
    list_filter = [
        'action',
        'entity_type',
        'timestamp',
        ('owner', admin.RelatedOnlyFieldListFilter),
    ]
    
    search_fields = [
        'description',
        'entity_id',
        'owner__username',
        'ip_address'
    ]
    
    readonly_fields = [
        'owner',
        'action',
        'entity_type',
        'entity_id',
        'description',
        'ip_address',
        'user_agent',
        'old_display',
        'new_display',
        'timestamp'
    ]
    
    fieldsets = (
        ('Action Details', {
            'fields': ('action', 'entity_type', 'entity_id', 'description')
        }),
        ('Owner Information', {
            'fields': ('owner', 'ip_address', 'user_agent')
        }),
        ('Changes', {
            'fields': ('old_display', 'new_display', 'timestamp'),
            'classes': ('collapse',)
        }),
    )
    
    date_hierarchy = 'timestamp'
    list_select_related = ['owner']
    
    ordering = ['-timestamp']
    
    def has_add_permission(self, request):
        return False
    
    def has_change_permission(self, request, obj=None):
        return False
    
    def has_delete_permission(self, request, obj=None):
        return False
    
    def get_actions(self, request):
        actions = super().get_actions(request)
        if 'delete_selected' in actions:
            del actions['delete_selected']
        return actions
    
    @admin.display(description='Owner')
    def owner_link(self, obj):
        opts = obj.owner._meta
        url = reverse(f'admin:{opts.app_label}_{opts.model_name}_change', args=[obj.owner_id])
        return format_html('<a href="{}">{}</a>', url, obj.owner)
    
    @admin.display(description='Description')
    def description_short(self, obj):
        max_length = 80
        if len(obj.description) > max_length:
            return f"{obj.description[:max_length]}..."
        return obj.description
    
    def _json_block(self, value):
        if value is None:
            return "None"
        return format_html('<pre>{}</pre>', json.dumps(value, indent=2))
    
    @admin.display(description='Before')
    def old_display(self, obj):
        return self._json_block(obj.changes_old)
    
    @admin.display(description='After')
    def new_display(self, obj):
        return self._json_block(obj.changes_new)
