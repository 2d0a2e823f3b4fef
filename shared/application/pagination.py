"""
Page-number pagination for service-level listings

Listings return ``{"data": [...], "meta": {"page", "take", "total"}}``
at the API boundary; services return a ``Page`` and leave the rendering
to the views.
"""

from dataclasses import dataclass
from typing import Generic, List, TypeVar

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator

from shared.domain.exceptions import ValidationError

T = TypeVar("T")

SORT_ORDERS = ("asc", "desc")


@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    take: int
    total: int

    @property
    def meta(self) -> dict:
        return {"page": self.page, "take": self.take, "total": self.total}


def order_by(queryset, sort_by: str, sort_order: str, allowed):
    """Apply a whitelisted ordering, ``pk`` as the tie breaker."""
    if sort_by not in allowed:
        raise ValidationError(f"Cannot sort by '{sort_by}'")
    if sort_order not in SORT_ORDERS:
        raise ValidationError("sort_order must be 'asc' or 'desc'")
    prefix = "" if sort_order == "asc" else "-"
    return queryset.order_by(f"{prefix}{sort_by}", f"{prefix}pk")


def paginate(queryset, page: int = 1, take: int | None = None) -> Page:
    take = take or settings.LIST_PAGE_SIZE
    if take < 1 or page < 1:
        raise ValidationError("page and take must be positive")
    take = min(take, settings.LIST_MAX_PAGE_SIZE)

    paginator = Paginator(queryset, take)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []
    return Page(items=items, page=page, take=take, total=paginator.count)
