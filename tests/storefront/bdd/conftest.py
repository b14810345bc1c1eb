"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart
from storefront.catalogue.details import UpdateProduct
from storefront.catalogue.product import Product

SHOPPER_ID = "user-bdd-001"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Products created in the scenario, by name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


def _cart():
    return current_domain.repository_for(ShoppingCart).for_user(SHOPPER_ID)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_stock(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, stock=stock, sizes=("42", "43"))


@given(parsers.cfparse('the shopper has {quantity:d} of "{name}" in size "{size}" in the cart'))
def product_in_cart(products, quantity, name, size):
    current_domain.process(
        AddToCart(user_id=SHOPPER_ID, product_id=str(products[name].id), size=size, quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('the stock of "{name}" is changed to {stock:d}'))
def change_stock(products, name, stock):
    current_domain.process(UpdateProduct(product_id=str(products[name].id), stock=stock), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {quantity:d} of "{name}" in size "{size}"'))
def add_to_cart(products, error, quantity, name, size):
    try:
        current_domain.process(
            AddToCart(user_id=SHOPPER_ID, product_id=str(products[name].id), size=size, quantity=quantity),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the stock of "{name}" is {stock:d}'))
def stock_is(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name].id).stock == stock


@then(parsers.re(r"the cart has (?P<count>\d+) lines?"))
def cart_has_lines(count):
    cart = _cart()
    assert len(cart.items if cart else []) == int(count)
