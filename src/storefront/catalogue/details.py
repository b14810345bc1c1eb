"""Product edits from the dashboard: command and handler.

Fields left as None on the command are not touched. Stock, when given, is
set to the new absolute value.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.01)
    images: Text()  # JSON: list of image references
    stock: Integer(min_value=0)
    sizes: Text()  # JSON: list of size labels
    category_id: Identifier()


@storefront.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id is not None:
            current_domain.repository_for(Category).get(command.category_id)

        changes = {}
        if command.name is not None:
            changes["name"] = command.name
        if command.description is not None:
            changes["description"] = command.description
        if command.price is not None:
            changes["price"] = command.price
        if command.images is not None:
            changes["images"] = json.loads(command.images)
        if command.sizes is not None:
            changes["sizes"] = json.loads(command.sizes)
        if command.category_id is not None:
            changes["category_id"] = command.category_id

        if changes:
            product.update_details(**changes)
        if command.stock is not None:
            product.set_stock(command.stock)

        repo.add(product)
