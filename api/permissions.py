"""
Multi-tenant permissions - ensure users can only access their own records
"""
from rest_framework import permissions


class IsRecordOwner(permissions.BasePermission):
    """
    Permission to only allow users to access records they own.
    """
    
    def has_permission(self, request, view):
        """Check if user is authenticated"""
        return bool(request.user and request.user.is_authenticated)
    
    def has_object_permission(self, request, view, obj):
        """Check if object belongs to the user"""
        return getattr(obj, 'owner_id', None) == request.user.pk
