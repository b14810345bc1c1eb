"""Product removal: command and handler.

Deleting a product also drops it from every shopping cart. Order items keep
their snapshot, so past orders are unaffected.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class RemoveProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        cart_repo = current_domain.repository_for(ShoppingCart)
        for cart in cart_repo.containing_product(product.id):
            cart.drop_product(product.id)
            cart_repo.add(cart)

        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id), name=product.name)
