"""Repository for the ShoppingCart aggregate."""

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=ShoppingCart)
class CartRepository:
    def for_user(self, user_id) -> ShoppingCart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def containing_product(self, product_id) -> list[ShoppingCart]:
        return [
            cart
            for cart in fetch_all(self._dao.query)
            if any(str(item.product_id) == str(product_id) for item in cart.items)
        ]
