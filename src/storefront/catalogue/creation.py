"""Product creation: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.01)
    images: Text()  # JSON: list of image references
    stock: Integer(default=0, min_value=0)
    sizes: Text()  # JSON: list of size labels
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        # Raises ObjectNotFoundError for an unknown category
        current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            images=json.loads(command.images) if command.images else [],
            stock=command.stock or 0,
            sizes=json.loads(command.sizes) if command.sizes else [],
            category_id=command.category_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
