"""
Page-number pagination with ``page`` / ``limit`` query parameters
"""
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from core.constants import Pagination


class LedgerPagination(PageNumberPagination):
    page_size_query_param = 'limit'
    max_page_size = Pagination.MAX_PAGE_SIZE
    
    def get_paginated_response(self, data):
        paginator = self.page.paginator
        # Empty results have no pages, same as the audit log listing
        total_pages = paginator.num_pages if paginator.count else 0
        return Response({
            'results': data,
            'pagination': {
                'currentPage': self.page.number,
                'totalPages': total_pages,
                'totalCount': paginator.count,
                'limit': self.get_page_size(self.request),
            }
        })
