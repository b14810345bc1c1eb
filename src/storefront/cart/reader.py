"""Cart Reader: the requesting user's cart lines, most recently added first.

Each line embeds the product and its category as they are now, so the
storefront can render prices and stock without extra requests.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product


def _category_snapshot(category):
    if category is None:
        return None
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
    }


def product_snapshot(product, category=None):
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "images": product.image_list,
        "stock": product.stock,
        "sizes": product.size_list,
        "category_id": str(product.category_id),
        "category": _category_snapshot(category),
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def _get_or_none(repo, identifier):
    try:
        return repo.get(identifier)
    except ObjectNotFoundError:
        return None


def load_cart_lines(user_id):
    """Return the user's cart lines as plain dicts; an empty list when there is no cart."""
    cart = current_domain.repository_for(ShoppingCart).for_user(user_id)
    if cart is None:
        return []

    product_repo = current_domain.repository_for(Product)
    category_repo = current_domain.repository_for(Category)
    categories = {}

    lines = []
    for item in sorted(cart.items, key=lambda i: i.added_at, reverse=True):
        product = _get_or_none(product_repo, item.product_id)
        if product is None:
            continue

        key = str(product.category_id)
        if key not in categories:
            categories[key] = _get_or_none(category_repo, product.category_id)

        lines.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "size": item.size,
                "quantity": item.quantity,
                "added_at": item.added_at,
                "product": product_snapshot(product, categories[key]),
            }
        )
    return lines
