"""Read side of the payment lifecycle: the tenant's payment dashboard."""

from typing import Any, Mapping, Optional
import logging

from apps.payments.filters import PaymentFilterSet
from apps.payments.models import Payment
from apps.properties.authorization import RoomAuthorizer
from shared.application.pagination import Page, order_by, paginate
from shared.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ('created_at', 'updated_at', 'expired_at', 'total_price', 'status', 'duration')


class TenantPaymentsQuery:
    """Payments made for rooms of the tenant's active properties"""

    def __init__(self, authorizer: RoomAuthorizer):
        self.authorizer = authorizer

    def list(
        self,
        actor,
        q: Optional[str] = None,
        status: Optional[str] = None,
        *,
        page: int = 1,
        take: Optional[int] = None,
        sort_by: str = 'created_at',
        sort_order: str = 'desc',
    ) -> Page:
        self.authorizer.ensure_tenant(actor)

        queryset = Payment.objects.filter(
            room__is_deleted=False,
            room__property__is_deleted=False,
            room__property__tenant=actor,
        ).select_related('user', 'room', 'room__property')

        filters: Mapping[str, Any] = {
            key: value for key, value in (('q', q), ('status', status)) if value
        }
        filterset = PaymentFilterSet(data=filters, queryset=queryset)
        if not filterset.is_valid():
            raise ValidationError(str(dict(filterset.errors)))

        queryset = order_by(filterset.qs, sort_by, sort_order, SORTABLE_FIELDS)
        return paginate(queryset, page, take)
