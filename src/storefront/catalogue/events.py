"""Domain events for the Category and Product aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new product category was added to the catalogue."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was listed in the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    category_id: Identifier(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A product's descriptive details or price were changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class StockAdjusted:
    """An admin set the product's stock to a new absolute value."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Units were taken out of stock by a purchase."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    remaining_stock: Integer(required=True)
