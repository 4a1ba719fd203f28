"""
Audit Entry Serializers
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from audit.helpers import parse_range_bound
from audit.models import AuditEntry
from core.constants import AuditAction, EntityType


class AuditOwnerSerializer(serializers.ModelSerializer):
    """Who made the change, as shown next to each entry"""
    
    class Meta:
        model = get_user_model()
        fields = ['id', 'username', 'email']
        read_only_fields = fields


class AuditEntrySerializer(serializers.ModelSerializer):
    """
    Serializer for AuditEntry model.
    
    Read-only: Audit entries cannot be created/updated via API.
    """
    
    owner = AuditOwnerSerializer(read_only=True)
    entityType = serializers.CharField(source='entity_type', read_only=True)
    entityId = serializers.CharField(source='entity_id', read_only=True)
    changes = serializers.SerializerMethodField()
    metadata = serializers.SerializerMethodField()
    
    class Meta:
        model = AuditEntry
        fields = [
            'id',
            'owner',
            'action',
            'entityType',
            'entityId',
            'changes',
            'metadata',
            'timestamp'
        ]
        read_only_fields = fields  # All fields are read-only
    
    def get_changes(self, obj):
        return {'old': obj.changes_old, 'new': obj.changes_new}
    
    def get_metadata(self, obj):
        return {
            'userAgent': obj.user_agent,
            'ipAddress': obj.ip_address,
            'description': obj.description,
        }


class _ChoiceOrAllField(serializers.ChoiceField):
    """Choice filter where '' and 'all' mean "no filter" """
    
    def to_internal_value(self, data):
        if data in ('', 'all'):
            return None
        return super().to_internal_value(data)


class AuditDateRangeSerializer(serializers.Serializer):
    """Validates ``startDate`` / ``endDate`` query parameters"""
    
    startDate = serializers.CharField(required=False, allow_blank=True)
    endDate = serializers.CharField(required=False, allow_blank=True)
    
    def validate(self, attrs):
        try:
            start = parse_range_bound(attrs.get('startDate'), end_of_day=False)
        except ValueError as e:
            raise serializers.ValidationError({'startDate': str(e)})
        try:
            end = parse_range_bound(attrs.get('endDate'), end_of_day=True)
        except ValueError as e:
            raise serializers.ValidationError({'endDate': str(e)})
        if start is not None and end is not None and start > end:
            raise serializers.ValidationError({'endDate': 'endDate must not be before startDate'})
        attrs['start'] = start
        attrs['end'] = end
        return attrs


class AuditListQuerySerializer(AuditDateRangeSerializer):
    """Validates the audit list query parameters"""
    
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, default=20)
    entityType = _ChoiceOrAllField(choices=EntityType.CHOICES, required=False, allow_blank=True)
    action = _ChoiceOrAllField(choices=AuditAction.CHOICES, required=False, allow_blank=True)
    entityId = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
