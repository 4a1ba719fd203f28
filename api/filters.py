"""
Custom filters for multi-tenant data
"""
from rest_framework import filters


class OwnerFilterBackend(filters.BaseFilterBackend):
    """
    Filter queryset to only show objects belonging to the requesting user
    """
    
    def filter_queryset(self, request, queryset, view):
        """Filter by owner"""
        if request.user and request.user.is_authenticated:
            return queryset.filter(owner=request.user)
        return queryset.none()
