"""Storefront bounded context: catalogue, carts, checkout and the admin dashboard.

A single domain owns every aggregate so that checkout can touch the cart,
product stock, the shipping address and the new order inside one Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

storefront = Domain(name="storefront")
