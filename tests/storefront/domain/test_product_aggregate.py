"""Tests for the Product aggregate: creation, edits and stock."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.events import ProductCreated, StockAdjusted, StockDecremented
from storefront.catalogue.product import Product


def _product(**overrides):
    defaults = {
        "name": "Zapatos Derby Negros",
        "price": 119.99,
        "category_id": "cat-formales",
        "stock": 40,
        "sizes": ["41", "42"],
        "images": ["/products/derby-1.jpg", "/products/derby-2.jpg"],
    }
    defaults.update(overrides)
    product = Product.create(**defaults)
    product._events.clear()
    return product


class TestProductCreation:
    def test_create_defaults(self):
        product = Product.create(name="Runner", price=10, category_id="cat-001")
        assert product.description == ""
        assert product.stock == 0
        assert product.image_list == []
        assert product.size_list == []

    def test_price_is_rounded_to_cents(self):
        product = Product.create(name="Runner", price=10.456, category_id="cat-001")
        assert product.price == 10.46

    def test_image_order_is_kept(self):
        product = _product()
        assert product.image_list == ["/products/derby-1.jpg", "/products/derby-2.jpg"]

    def test_duplicate_sizes_are_collapsed(self):
        product = _product(sizes=["42", "42", " 43 ", ""])
        assert product.size_list == ["42", "43"]

    def test_zero_price_is_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Runner", price=0, category_id="cat-001")

    def test_create_raises_event(self):
        product = Product.create(name="Runner", price=10, category_id="cat-001", stock=3)
        event = product._events[-1]
        assert isinstance(event, ProductCreated)
        assert event.stock == 3


class TestProductEdits:
    def test_partial_update_keeps_other_fields(self):
        product = _product()
        product.update_details(price=99.5)

        assert product.price == 99.5
        assert product.name == "Zapatos Derby Negros"
        assert product.size_list == ["41", "42"]

    def test_set_stock_is_absolute(self):
        product = _product(stock=40)
        product.set_stock(7)

        assert product.stock == 7
        event = product._events[-1]
        assert isinstance(event, StockAdjusted)
        assert event.previous_stock == 40

    def test_negative_stock_is_rejected(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.set_stock(-1)


class TestStock:
    def test_offers_listed_size(self):
        product = _product(sizes=["41", "42"])
        assert product.offers_size("42")
        assert not product.offers_size("45")

    def test_product_without_sizes_accepts_any(self):
        product = _product(sizes=[])
        assert product.offers_size("one-size")

    def test_ensure_available_names_the_product(self):
        product = _product(stock=1)
        with pytest.raises(ValidationError) as exc_info:
            product.ensure_available(3)

        assert "Zapatos Derby Negros" in exc_info.value.messages["stock"][0]
        assert exc_info.value.messages["product_id"] == [str(product.id)]

    def test_decrement_stock(self):
        product = _product(stock=5)
        product.decrement_stock(2, order_id="order-001")

        assert product.stock == 3
        event = product._events[-1]
        assert isinstance(event, StockDecremented)
        assert event.remaining_stock == 3

    def test_decrement_below_zero_is_rejected(self):
        product = _product(stock=1)
        with pytest.raises(ValidationError):
            product.decrement_stock(2)
        assert product.stock == 1
