"""Domain events for the User and Address aggregates."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created on the storefront."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Address")
class AddressRecorded:
    """A shipping address was saved for the first time for a user."""

    __version__ = 1

    address_id: Identifier(required=True)
    user_id: Identifier(required=True)
    city: String(required=True)
    country: String(required=True)
