"""
Audit Query Service

Filtered, paginated and aggregated reads of the audit trail. Every query
starts from the requesting owner's entries; no filter can widen that scope.
"""

from datetime import timedelta

from django.core.paginator import EmptyPage, Paginator
from django.db.models import Count
from django.db.models.functions import TruncDate
from django.utils import timezone

from audit.models import AuditEntry
from core.constants import AuditStats, Pagination
from core.dto import AuditFilter, AuditPage
from core.exceptions import NotFoundError
from core.services import BaseService


class AuditQueryService(BaseService):
    """Read access to one owner's audit entries"""
    
    def __init__(self, owner):
        super().__init__(owner)
    
    def base_queryset(self):
        """Owner scope; every read goes through here"""
        return AuditEntry.objects.for_owner(self.owner).select_related('owner')
    
    def filtered_queryset(self, filters: AuditFilter = None):
        filters = filters or AuditFilter()
        queryset = self.base_queryset()
        
        if filters.entity_type:
            queryset = queryset.for_entity_type(filters.entity_type)
        if filters.action:
            queryset = queryset.for_action(filters.action)
        if filters.entity_id:
            queryset = queryset.for_entity_id(filters.entity_id)
        if filters.search:
            queryset = queryset.matching(filters.search)
        
        return queryset.between(filters.start, filters.end).newest_first()
    
    def list(self, filters: AuditFilter = None, page=1, page_size=Pagination.DEFAULT_PAGE_SIZE):
        """
        One page of entries, newest first.
        
        A page past the end comes back empty, with the real counts.
        """
        page = max(int(page), 1)
        page_size = min(max(int(page_size), 1), Pagination.MAX_PAGE_SIZE)
        
        paginator = Paginator(self.filtered_queryset(filters), page_size)
        total_count = paginator.count
        total_pages = paginator.num_pages if total_count else 0
        
        try:
            entries = list(paginator.page(page).object_list)
        except EmptyPage:
            entries = []
        
        return AuditPage(
            entries=entries,
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
        )
    
    def get_by_id(self, pk):
        """
        A single entry of this owner.
        
        Entries of other owners are reported exactly like missing ones.
        """
        try:
            entry = self.base_queryset().filter(pk=pk).first()
        except (ValueError, TypeError):
            entry = None
        
        if entry is None:
            raise NotFoundError(
                resource_type='AuditEntry',
                resource_id=pk,
                message='Audit log not found',
            )
        return entry
    
    def stats(self, start=None, end=None):
        """
        Totals for the owner within an optional range.
        
        Returns total, counts per action, counts per entity type, and
        per-day counts for the last 30 days inside the range.
        """
        queryset = self.base_queryset().between(start, end)
        
        total = queryset.count()
        
        action_breakdown = dict(
            queryset.order_by()
            .values_list('action')
            .annotate(count=Count('id'))
        )
        
        entity_breakdown = dict(
            queryset.order_by()
            .values_list('entity_type')
            .annotate(count=Count('id'))
        )
        
        window_start = timezone.now() - timedelta(days=AuditStats.DAILY_ACTIVITY_DAYS)
        daily = (
            queryset.filter(timestamp__gte=window_start)
            .order_by()
            .annotate(day=TruncDate('timestamp'))
            .values('day')
            .annotate(count=Count('id'))
            .order_by('day')
        )
        daily_activity = [
            {'date': row['day'].isoformat(), 'count': row['count']}
            for row in daily
        ]
        
        self.log_info("Audit stats computed", total=total)
        
        return {
            'total': total,
            'actionBreakdown': action_breakdown,
            'entityBreakdown': entity_breakdown,
            'dailyActivity': daily_activity,
        }
