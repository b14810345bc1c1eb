"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=Order)
class OrderRepository:
    def newest_first(self, user_id=None) -> list[Order]:
        """Every order, or only ``user_id``'s orders, most recent first."""
        queryset = self._dao.query
        if user_id is not None:
            queryset = queryset.filter(user_id=str(user_id))
        return fetch_all(queryset.order_by("-created_at"))

    def recent(self, count: int = 5) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(count).all().items

    def count(self) -> int:
        return self._dao.query.all().total

    def not_cancelled(self, created_since=None) -> list[Order]:
        """Orders that still count towards revenue, optionally from ``created_since`` on."""
        queryset = self._dao.query.exclude(status=OrderStatus.CANCELLED.value)
        if created_since is not None:
            queryset = queryset.filter(created_at__gte=created_since)
        return fetch_all(queryset)
