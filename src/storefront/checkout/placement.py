"""Order placement: turns the user's cart into an order.

The handler is the whole checkout: read the cart, check stock for every line,
resolve the shipping address, write the order, decrement stock and empty the
cart. All of it runs in the handler's Unit of Work, so a failure at any step
leaves nothing behind.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.addresses import Address, resolve_address
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100)
    payment_method = String(max_length=50)


def _validate_stock(cart, product_repo):
    """Load the product behind every cart line, failing on the first short one.

    Lines for the same product in different sizes draw on one stock level, so
    they are checked against their combined quantity. Nothing is written here.
    """
    products = {}
    requested = {}
    checked = []
    for item in cart.items:
        key = str(item.product_id)
        if key not in products:
            try:
                products[key] = product_repo.get(item.product_id)
            except ObjectNotFoundError as exc:
                raise ValidationError(
                    {"product_id": [f"Product {item.product_id} is no longer available"]},
                ) from exc

        requested[key] = requested.get(key, 0) + item.quantity
        products[key].ensure_available(requested[key])
        checked.append((item, products[key]))
    return checked, list(products.values())


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.for_user(command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        checked, products = _validate_stock(cart, product_repo)

        now = datetime.now(UTC)
        address = resolve_address(
            current_domain.repository_for(Address),
            user_id=command.user_id,
            street=command.street,
            city=command.city,
            zip_code=command.zip_code,
            state=command.state,
            country=command.country,
            now=now,
        )

        order = Order.place(
            user_id=command.user_id,
            lines=[
                {
                    "product_id": product.id,
                    "product_name": product.name,
                    "quantity": item.quantity,
                    "unit_price": product.price,
                    "size": item.size,
                }
                for item, product in checked
            ],
            shipping_address_id=address.id,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)

        for item, product in checked:
            product.decrement_stock(item.quantity, order_id=order.id)
        for product in products:
            product_repo.add(product)

        cart.clear(order_id=order.id)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total=order.total,
            lines=len(checked),
        )
        return str(order.id)
