"""
Page/limit pagination shared by list operations.
"""

import math
from typing import Any, Callable, Dict, Optional

from .conf import get_setting


def clamp_page(page: Any = None, limit: Any = None):
    """Normalise page/limit input to ``(page >= 1, 1 <= limit <= MAX_PAGE_SIZE)``."""
    try:
        page = int(page) if page is not None else 1
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit) if limit is not None else get_setting('DEFAULT_PAGE_SIZE')
    except (TypeError, ValueError):
        limit = get_setting('DEFAULT_PAGE_SIZE')
    page = max(page, 1)
    limit = min(max(limit, 1), get_setting('MAX_PAGE_SIZE'))
    return page, limit


def paginate(queryset, page: Any = None, limit: Any = None,
             transform: Optional[Callable] = None) -> Dict[str, Any]:
    """
    Slice a queryset or list and return ``{"results": [...], "pagination": {...}}``.

    Args:
        queryset: Ordered queryset (or an already ordered list) to slice
        page: 1-based page number
        limit: Page size, clamped to MAX_PAGE_SIZE
        transform: Optional callable applied to each row
    """
    page, limit = clamp_page(page, limit)
    total = len(queryset) if isinstance(queryset, list) else queryset.count()
    offset = (page - 1) * limit
    rows = list(queryset[offset:offset + limit])
    if transform is not None:
        rows = [transform(row) for row in rows]
    return {
        'results': rows,
        'pagination': {
            'page': page,
            'limit': limit,
            'total': total,
            'total_pages': math.ceil(total / limit) if total else 0,
        },
    }
