"""Shopping Cart aggregate: one cart per user, holding (product, size) lines.

Adding a product in a size that is already in the cart increases that line's
quantity instead of creating a second line. Checkout empties the cart.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product_and_size(self):
        keys = [(str(i.product_id), i.size) for i in self.items]
        if len(keys) != len(set(keys)):
            raise ValidationError({"items": ["A product and size can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} not found")
        return item

    def line_for(self, product_id, size):
        return next(
            (i for i in self.items if str(i.product_id) == str(product_id) and i.size == size),
            None,
        )

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, size, quantity):
        """Add a line, or increase the quantity of the existing (product, size) line.

        Returns the affected line and whether it was newly created.
        """
        now = datetime.now(UTC)
        existing = self.line_for(product_id, size)

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                size=size,
                quantity=quantity,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product_id),
                size=size,
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item, existing is None

    def update_item_quantity(self, item_id, new_quantity):
        """Set the quantity of an existing line."""
        if new_quantity is None or new_quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than 0"]})

        item = self.find_item(item_id)
        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )

    def drop_product(self, product_id):
        """Remove every line for ``product_id`` (the product left the catalogue)."""
        for item in [i for i in self.items if str(i.product_id) == str(product_id)]:
            self.remove_item(item.id)

    def clear(self, order_id=None):
        """Remove every line, typically after the cart was turned into an order."""
        item_count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                order_id=str(order_id) if order_id else None,
                items_removed=item_count,
            )
        )
