"""
Audit Log API Views

Read-only access to the requesting owner's audit trail.
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from audit.serializers import (
    AuditDateRangeSerializer,
    AuditEntrySerializer,
    AuditListQuerySerializer,
)
from audit.services import AuditQueryService
from core.dto import AuditFilter
from core.exceptions import NotFoundError


class AuditLogViewSet(viewsets.ViewSet):
    """
    Read-only ViewSet for audit entries.
    
    Access Rules:
    - Every endpoint is scoped to the authenticated owner
    - Other owners' entries answer 404, never 403
    
    Endpoints:
    - list: filter by entityType, action, entityId, search, startDate, endDate
    - retrieve: single entry
    - stats: totals and breakdowns
    """
    
    permission_classes = [IsAuthenticated]
    
    def get_service(self):
        return AuditQueryService(self.request.user)
    
    def list(self, request):
        """
        GET /api/audit-logs/?page=1&limit=20&entityType=expense&action=UPDATE
        """
        params = AuditListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        
        filters = AuditFilter(
            entity_type=data.get('entityType'),
            action=data.get('action'),
            entity_id=data.get('entityId') or None,
            search=data.get('search') or None,
            start=data.get('start'),
            end=data.get('end'),
        )
        page = self.get_service().list(filters, page=data['page'], page_size=data['limit'])
        
        return Response({
            'auditLogs': AuditEntrySerializer(page.entries, many=True).data,
            'pagination': {
                'currentPage': page.current_page,
                'totalPages': page.total_pages,
                'totalCount': page.total_count,
                'hasNext': page.has_next,
                'hasPrev': page.has_prev,
            }
        })
    
    def retrieve(self, request, pk=None):
        """GET /api/audit-logs/<id>/"""
        try:
            entry = self.get_service().get_by_id(pk)
        except NotFoundError as e:
            return Response({'detail': e.message}, status=status.HTTP_404_NOT_FOUND)
        
        return Response(AuditEntrySerializer(entry).data)
    
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        GET /api/audit-logs/stats/?startDate=2024-01-01&endDate=2024-01-31
        
        Returns:
        - Total entries
        - Entries by action
        - Entries by entity type
        - Daily activity (last 30 days)
        """
        params = AuditDateRangeSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        
        return Response(
            self.get_service().stats(
                start=params.validated_data.get('start'),
                end=params.validated_data.get('end'),
            )
        )
