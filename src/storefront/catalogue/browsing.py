"""Public catalogue browsing: filtered, paginated product listing."""

import math

from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def browse_products(
    page=1,
    limit=DEFAULT_PAGE_SIZE,
    search=None,
    category_slug=None,
    min_price=None,
    max_price=None,
):
    """Return one page of products, newest first, with their categories.

    ``search`` matches name or description case-insensitively and
    ``category_slug`` restricts to one category; an unknown slug yields an
    empty page. Price bounds are inclusive.

    Returns a ``(rows, pagination)`` pair where each row is a
    ``(product, category)`` tuple.
    """
    page = max(int(page), 1)
    limit = min(max(int(limit), 1), MAX_PAGE_SIZE)

    categories = {str(c.id): c for c in current_domain.repository_for(Category).all_by_name()}

    category_id = None
    if category_slug:
        match = next((c for c in categories.values() if c.slug == category_slug), None)
        if match is None:
            return [], {"page": page, "limit": limit, "total": 0, "total_pages": 0}
        category_id = str(match.id)

    result = current_domain.repository_for(Product).search(
        offset=(page - 1) * limit,
        limit=limit,
        category_id=category_id,
        term=search,
        min_price=min_price,
        max_price=max_price,
    )
    rows = [(p, categories.get(str(p.category_id))) for p in result.items]

    return rows, {
        "page": page,
        "limit": limit,
        "total": result.total,
        "total_pages": math.ceil(result.total / limit),
    }
