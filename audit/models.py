"""
Audit Entry Model

IMMUTABLE: Audit entries cannot be edited or deleted after creation.
Purpose: Before/after history of every successful mutation, per owner.
"""

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from core.constants import AuditAction, EntityType


# ============================================================================
# CUSTOM MANAGER AND QUERYSET
# ============================================================================

class AuditEntryQuerySet(models.QuerySet):
    """Custom queryset for audit entries with filtering helpers"""
    
    def for_owner(self, owner):
        """Filter entries for a specific owner"""
        return self.filter(owner=owner)
    
    def for_entity_type(self, entity_type):
        return self.filter(entity_type=entity_type)
    
    def for_entity_id(self, entity_id):
        """Entries of one record; ids are stored as strings"""
        return self.filter(entity_id=str(entity_id))
    
    def for_action(self, action):
        """Filter entries for a specific action"""
        return self.filter(action=action)
    
    def matching(self, text):
        """Case-insensitive substring match on the description"""
        return self.filter(description__icontains=text)
    
    def between(self, start=None, end=None):
        """Entries inside an inclusive timestamp range; open ends allowed"""
        queryset = self
        if start is not None:
            queryset = queryset.filter(timestamp__gte=start)
        if end is not None:
            queryset = queryset.filter(timestamp__lte=end)
        return queryset
    
    def newest_first(self):
        return self.order_by('-timestamp', '-id')
    
    def update(self, **kwargs):
        raise PermissionDenied("Audit entries are immutable and cannot be modified.")
    
    def delete(self):
        raise PermissionDenied("Audit entries are immutable and cannot be deleted.")


class AuditEntryManager(models.Manager.from_queryset(AuditEntryQuerySet)):
    """Custom manager for audit entries"""
    
    def append(self, record):
        """
        Persist one ``core.dto.AuditRecord``.
        
        The timestamp is assigned here, at write time.
        """
        entry = self.model(
            owner_id=record.owner_id,
            action=record.action,
            entity_type=record.entity_type,
            entity_id=record.entity_id,
            changes_old=record.old,
            changes_new=record.new,
            user_agent=record.user_agent or '',
            ip_address=record.ip_address,
            description=record.description,
        )
        entry.save()
        return entry


# ============================================================================
# AUDIT ENTRY MODEL
# ============================================================================

class AuditEntry(models.Model):
    """
    Immutable record of one successful create, update or delete.
    
    Security:
    - Entries CANNOT be edited after creation
    - Entries CANNOT be deleted (except via cascading owner deletion)
    - An owner only ever sees their own entries
    """
    
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='audit_entries',
        help_text="User who performed the action"
    )
    
    action = models.CharField(
        max_length=10,
        choices=AuditAction.CHOICES,
        help_text="Type of action performed"
    )
    
    entity_type = models.CharField(
        max_length=30,
        choices=EntityType.CHOICES,
        help_text="Type of record affected"
    )
    
    entity_id = models.CharField(
        max_length=64,
        help_text="ID of the record affected"
    )
    
    # Snapshots
    changes_old = models.JSONField(
        null=True,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="Record state before the action (empty for creations)"
    )
    
    changes_new = models.JSONField(
        null=True,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="Record state after the action (empty for deletions)"
    )
    
    # Request metadata
    user_agent = models.TextField(
        blank=True,
        default='',
        help_text="User agent string from request"
    )
    
    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        help_text="IP address of the user"
    )
    
    description = models.TextField(
        help_text="Human-readable description of the action"
    )
    
    timestamp = models.DateTimeField(
        auto_now_add=True,
        help_text="When the entry was written"
    )
    
    objects = AuditEntryManager()
    
    class Meta:
        verbose_name = "Audit Entry"
        verbose_name_plural = "Audit Entries"
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['owner', '-timestamp'], name='audit_owner_ts_idx'),
            models.Index(fields=['owner', 'entity_type', '-timestamp'], name='audit_owner_type_ts_idx'),
            models.Index(fields=['owner', 'action', '-timestamp'], name='audit_owner_action_ts_idx'),
            models.Index(fields=['owner', 'entity_id', '-timestamp'], name='audit_owner_entity_ts_idx'),
        ]
    
    def __str__(self):
        return f"{self.owner_id} - {self.action} - {self.entity_type} #{self.entity_id} - {self.timestamp}"
    
    def clean(self):
        if not (self.entity_id or '').strip():
            raise ValidationError({'entity_id': "Audit entries need an entity ID."})
        if self.changes_old is None and self.changes_new is None:
            raise ValidationError("Audit entries need an old or a new snapshot.")
        if self.action not in AuditAction.SUCCESS_STATUS:
            raise ValidationError({'action': f"Unknown action: {self.action}"})
        if self.entity_type not in EntityType.ALL:
            raise ValidationError({'entity_type': f"Unknown entity type: {self.entity_type}"})
    
    def save(self, *args, **kwargs):
        """
        Override save to enforce immutability.
        Only allow creation, not updates.
        """
        if self.pk is not None:
            # This is an update attempt
            raise PermissionDenied(
                "Audit entries are immutable and cannot be modified after creation."
            )
        
        self.clean()
        super().save(*args, **kwargs)
    
    def delete(self, *args, **kwargs):
        """
        Override delete to prevent deletion.
        """
        raise PermissionDenied(
            "Audit entries are immutable and cannot be deleted."
        )
    
