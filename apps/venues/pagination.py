"""Pagination for the public venue listing."""

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore


class VenuePagination(PageNumberPagination):
    """``?page=`` and ``?limit=`` paging with an explicit pagination block."""

    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):  # type: ignore
        page = self.page
        return Response(
            {
                "venues": data,
                "pagination": {
                    "current_page": page.number,
                    "total_pages": page.paginator.num_pages,
                    "total_count": page.paginator.count,
                    "limit": page.paginator.per_page,
                    "has_next_page": page.has_next(),
                    "has_prev_page": page.has_previous(),
                },
            }
        )
