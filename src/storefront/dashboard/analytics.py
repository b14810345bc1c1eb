"""Admin dashboard read models: headline stats and six-month sales analytics.

Both are computed on request from the order, product and user repositories.
Nothing here writes.
"""

import calendar
from collections import Counter, defaultdict
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.reader import product_snapshot
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.identity.user import User, UserRole
from storefront.order.order import Order
from storefront.utils.queries import fetch_all

RECENT_ORDERS = 5
TOP_PRODUCTS_IN_STATS = 5
TOP_PRODUCTS_IN_ANALYTICS = 10
ANALYTICS_WINDOW_MONTHS = 6
UNCATEGORIZED = "Uncategorized"


def months_before(moment, months):
    """Same day and time ``months`` calendar months earlier, clamped to the month's last day."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _get_or_none(repo, identifier):
    try:
        return repo.get(identifier)
    except ObjectNotFoundError:
        return None


def _round(amount):
    return round(amount, 2)


def dashboard_stats():
    product_repo = current_domain.repository_for(Product)
    order_repo = current_domain.repository_for(Order)
    user_repo = current_domain.repository_for(User)
    category_repo = current_domain.repository_for(Category)

    revenue = sum(order.total for order in order_repo.not_cancelled())

    recent_orders = []
    for order in order_repo.recent(RECENT_ORDERS):
        user = _get_or_none(user_repo, order.user_id)
        recent_orders.append(
            {
                "id": str(order.id),
                "total": order.total,
                "status": order.status,
                "created_at": order.created_at,
                "user": {"name": user.name, "email": user.email} if user else None,
            }
        )

    sold = Counter()
    for order in fetch_all(order_repo._dao.query):
        for item in order.items:
            sold[str(item.product_id)] += item.quantity

    top_products = []
    for product_id, total_sold in sold.most_common(TOP_PRODUCTS_IN_STATS):
        product = _get_or_none(product_repo, product_id)
        category = _get_or_none(category_repo, product.category_id) if product else None
        top_products.append(
            {
                "product_id": product_id,
                "product": product_snapshot(product, category) if product else None,
                "total_sold": total_sold,
            }
        )

    return {
        "total_products": product_repo.count(),
        "total_orders": order_repo.count(),
        "total_revenue": _round(revenue),
        "total_users": user_repo.count_by_role(UserRole.USER),
        "recent_orders": recent_orders,
        "top_products": top_products,
    }


def sales_analytics(now=None):
    """Sales by month, by category and by product over the last six months.

    Cancelled orders are left out. Months are ``YYYY-MM`` keys in ascending
    order. A line whose product has since been deleted is reported under
    "Uncategorized".
    """
    now = now or datetime.now(UTC)
    since = months_before(now, ANALYTICS_WINDOW_MONTHS)

    product_repo = current_domain.repository_for(Product)
    category_repo = current_domain.repository_for(Category)
    orders = current_domain.repository_for(Order).not_cancelled(created_since=since)

    by_month = defaultdict(float)
    by_category = defaultdict(float)
    by_product = Counter()
    category_names = {}

    for order in orders:
        by_month[order.created_at.strftime("%Y-%m")] += order.total

        for item in order.items:
            key = str(item.product_id)
            if key not in category_names:
                product = _get_or_none(product_repo, item.product_id)
                category = _get_or_none(category_repo, product.category_id) if product else None
                category_names[key] = category.name if category else UNCATEGORIZED

            by_category[category_names[key]] += item.unit_price * item.quantity
            by_product[item.product_name] += item.quantity

    return {
        "sales_by_month": [{"month": month, "sales": _round(sales)} for month, sales in sorted(by_month.items())],
        "sales_by_category": [
            {"category": category, "sales": _round(sales)} for category, sales in sorted(by_category.items())
        ],
        "top_products": [
            {"name": name, "sales": quantity} for name, quantity in by_product.most_common(TOP_PRODUCTS_IN_ANALYTICS)
        ],
    }
