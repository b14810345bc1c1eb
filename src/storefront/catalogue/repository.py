"""Repositories for catalogue aggregates."""

from protean.utils.query import Q

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug: str) -> Category | None:
        return self._dao.query.filter(slug=slug).all().first

    def all_by_name(self) -> list[Category]:
        return fetch_all(self._dao.query.order_by("name"))


@storefront.repository(part_of=Product)
class ProductRepository:
    def newest_first(self, **filters) -> list[Product]:
        """All products matching ``filters`` (protean lookups), newest first."""
        queryset = self._dao.query
        if filters:
            queryset = queryset.filter(**filters)
        return fetch_all(queryset.order_by("-created_at"))

    def search(self, offset, limit, category_id=None, term=None, min_price=None, max_price=None):
        """One page of matching products, newest first.

        ``term`` matches name or description case-insensitively; price bounds
        are inclusive. The returned ResultSet's ``total`` counts every match.
        """
        queryset = self._dao.query
        if category_id is not None:
            queryset = queryset.filter(category_id=category_id)
        if term:
            queryset = queryset.filter(Q(name__icontains=term) | Q(description__icontains=term))
        if min_price is not None:
            queryset = queryset.filter(price__gte=min_price)
        if max_price is not None:
            queryset = queryset.filter(price__lte=max_price)
        return queryset.order_by("-created_at").offset(offset).limit(limit).all()

    def count(self) -> int:
        return self._dao.query.all().total
