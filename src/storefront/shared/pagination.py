"""Paged reads over Protean query sets."""

import math
from dataclasses import dataclass, field

_BATCH_SIZE = 100


@dataclass(frozen=True)
class Page:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def pages(self) -> int:
        if not self.limit:
            return 0
        return math.ceil(self.total / self.limit)


def paginate(queryset, page: int = 1, limit: int = 20) -> Page:
    """Slice ``queryset`` to one page and report the unsliced total. Ties break on ``id``."""
    page = max(page, 1)
    limit = max(limit, 1)
    results = queryset.order_by("id").offset((page - 1) * limit).limit(limit).all()
    return Page(items=list(results.items), total=results.total, page=page, limit=limit)


def fetch_all(queryset) -> list:
    """Read every row of ``queryset`` in batches, ignoring the default result limit.

    ``id`` is appended to the ordering so OFFSET batches see one stable row order.
    """
    queryset = queryset.order_by("id")
    items: list = []
    offset = 0
    while True:
        batch = queryset.offset(offset).limit(_BATCH_SIZE).all().items
        items.extend(batch)
        if len(batch) < _BATCH_SIZE:
            return items
        offset += _BATCH_SIZE
