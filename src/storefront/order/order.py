"""Order aggregate: a frozen record of a completed checkout.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, PROCESSING, SHIPPED)

DELIVERED and CANCELLED are terminal. Transitions are only ever requested by
an admin; nothing moves an order automatically.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

DEFAULT_PAYMENT_METHOD = "card"


@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line, copied from the cart at checkout.

    Name and unit price are the product's values at purchase time; later
    catalogue edits (or deleting the product) do not touch them.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    size = String(max_length=20)

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    shipping_address_id = Identifier(required=True)
    payment_method = String(max_length=50, default=DEFAULT_PAYMENT_METHOD)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        expected = round(sum(item.unit_price * item.quantity for item in self.items), 2)
        if abs((self.total or 0.0) - expected) > 0.005:
            raise ValidationError({"total": [f"Order total {self.total} does not match its items ({expected})"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_address_id, payment_method=None):
        """Create a PENDING order from checkout lines.

        Args:
            user_id: The user placing the order.
            lines: List of dicts with product_id, product_name, quantity,
                unit_price and size.
            shipping_address_id: The resolved shipping address.
            payment_method: Free-form label chosen at checkout.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=line["product_id"],
                product_name=line["product_name"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                size=line.get("size"),
            )
            for line in lines
        ]
        total = round(sum(item.unit_price * item.quantity for item in items), 2)

        order = cls(
            user_id=user_id,
            items=items,
            total=total,
            shipping_address_id=shipping_address_id,
            payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total=total,
                item_count=sum(item.quantity for item in items),
                shipping_address_id=str(shipping_address_id),
                payment_method=order.payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def transition_to(self, status):
        """Move the order to ``status`` (an OrderStatus or its string value)."""
        try:
            target = status if isinstance(status, OrderStatus) else OrderStatus(str(status).upper())
        except ValueError as exc:
            raise ValidationError({"status": [f"Unknown order status {status}"]}) from exc

        if target == OrderStatus.CANCELLED:
            return self.cancel()

        self._assert_can_transition(target)
        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def cancel(self):
        """Cancel the order. Stock is not returned to the catalogue."""
        self._assert_can_transition(OrderStatus.CANCELLED)
        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                cancelled_at=now,
            )
        )

    @property
    def is_cancelled(self):
        return self.status == OrderStatus.CANCELLED.value
