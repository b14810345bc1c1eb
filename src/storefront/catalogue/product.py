"""Product aggregate root: the sellable item and its stock level."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def _normalize_sizes(sizes):
    """De-duplicate size labels, keeping the first occurrence of each."""
    seen = []
    for size in sizes or []:
        label = str(size).strip()
        if label and label not in seen:
            seen.append(label)
    return seen


@storefront.aggregate
class Product:
    """A product listed in the catalogue.

    Images are an ordered list of references (the first one is the cover) and
    sizes are a set of labels such as "38" or "XL". Both are stored as JSON
    text. Stock is never negative: checkout decrements it and admins set it
    to an absolute value.
    """

    name: String(required=True, max_length=255)
    description: Text(default="")
    price: Float(required=True, min_value=0.01)
    images: Text(default="[]")
    stock: Integer(default=0, min_value=0)
    sizes: Text(default="[]")
    category_id: Identifier(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @property
    def image_list(self):
        return json.loads(self.images) if self.images else []

    @property
    def size_list(self):
        return json.loads(self.sizes) if self.sizes else []

    @classmethod
    def create(cls, name, price, category_id, description=None, images=None, stock=0, sizes=None):
        from storefront.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description or "",
            price=round(float(price), 2),
            images=json.dumps(list(images or [])),
            stock=stock or 0,
            sizes=json.dumps(_normalize_sizes(sizes)),
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=product.price,
                stock=product.stock,
                category_id=category_id,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        images=_UNSET,
        sizes=_UNSET,
        category_id=_UNSET,
    ):
        """Apply a partial update; arguments left unset keep their current value."""
        from storefront.catalogue.events import ProductUpdated

        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description or ""
        if price is not _UNSET:
            self.price = round(float(price), 2)
        if images is not _UNSET:
            self.images = json.dumps(list(images or []))
        if sizes is not _UNSET:
            self.sizes = json.dumps(_normalize_sizes(sizes))
        if category_id is not _UNSET:
            self.category_id = category_id

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category_id=self.category_id,
            )
        )

    def set_stock(self, quantity):
        """Set stock to an absolute value (admin edit)."""
        from storefront.catalogue.events import StockAdjusted

        if quantity is None or quantity < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous = self.stock
        self.stock = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockAdjusted(
                product_id=self.id,
                previous_stock=previous,
                new_stock=quantity,
            )
        )

    def offers_size(self, size):
        sizes = self.size_list
        return not sizes or size in sizes

    def ensure_available(self, quantity):
        """Raise when fewer than ``quantity`` units are in stock."""
        if self.stock < quantity:
            raise ValidationError(
                {
                    "stock": [f"Insufficient stock for {self.name}"],
                    "product_id": [str(self.id)],
                }
            )

    def decrement_stock(self, quantity, order_id=None):
        """Take ``quantity`` units out of stock for a purchase."""
        from storefront.catalogue.events import StockDecremented

        self.ensure_available(quantity)

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=self.id,
                order_id=order_id,
                quantity=quantity,
                remaining_stock=self.stock,
            )
        )
