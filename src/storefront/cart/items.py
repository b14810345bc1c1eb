"""Cart item management: commands and handler.

Every cart command names the user rather than a cart id: a user has exactly
one cart, created on first use.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.offers_size(command.size):
            raise ValidationError({"size": [f"Size {command.size} is not available for {product.name}"]})

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id) or ShoppingCart.create(command.user_id)

        quantity = command.quantity or 1
        existing = cart.line_for(product.id, command.size)
        product.ensure_available(quantity + (existing.quantity if existing else 0))

        item, created = cart.add_item(
            product_id=product.id,
            size=command.size,
            quantity=quantity,
        )
        repo.add(cart)
        return {"item_id": str(item.id), "created": created}

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = self._cart_of(repo, command.user_id)
        item = cart.find_item(command.item_id)

        product = current_domain.repository_for(Product).get(item.product_id)
        product.ensure_available(command.quantity)

        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = self._cart_of(repo, command.user_id)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)

    @staticmethod
    def _cart_of(repo, user_id):
        cart = repo.for_user(user_id)
        if cart is None:
            # No cart means the item cannot belong to this user
            raise ObjectNotFoundError("Cart item not found")
        return cart
