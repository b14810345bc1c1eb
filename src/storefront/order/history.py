"""Order history read model: orders with their lines, address and owner."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.addresses import Address
from storefront.identity.user import User
from storefront.order.order import Order


class _Lookup:
    """Per-request cache over ``repository.get`` that tolerates missing rows."""

    def __init__(self, aggregate_cls):
        self.repo = current_domain.repository_for(aggregate_cls)
        self.cache = {}

    def __call__(self, identifier):
        key = str(identifier)
        if key not in self.cache:
            try:
                self.cache[key] = self.repo.get(identifier)
            except ObjectNotFoundError:
                self.cache[key] = None
        return self.cache[key]


def _address_view(address):
    if address is None:
        return None
    return {
        "id": str(address.id),
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zip_code": address.zip_code,
        "country": address.country,
    }


def _user_view(user):
    if user is None:
        return None
    return {"id": str(user.id), "email": user.email, "name": user.name}


def order_view(order, addresses=None, users=None):
    addresses = addresses or _Lookup(Address)
    users = users or _Lookup(User)
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "status": order.status,
        "total": order.total,
        "payment_method": order.payment_method,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "items": [
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "size": item.size,
            }
            for item in order.items
        ],
        "shipping_address": _address_view(addresses(order.shipping_address_id)),
        "user": _user_view(users(order.user_id)),
    }


def order_history(user_id=None):
    """Orders newest first; every order when ``user_id`` is None, else only that user's."""
    addresses = _Lookup(Address)
    users = _Lookup(User)
    orders = current_domain.repository_for(Order).newest_first(user_id=user_id)
    return [order_view(order, addresses, users) for order in orders]
