"""Address aggregate and the resolver that de-duplicates shipping addresses."""

import structlog
from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront

logger = structlog.get_logger(__name__)

DEFAULT_COUNTRY = "Spain"


@storefront.aggregate
class Address:
    """A shipping address owned by a user.

    Addresses are reused across orders: before creating one, checkout looks
    for an existing row with the same street, city and zip. The comparison is
    an exact string match, so "Main St" and "main st" are different addresses.
    """

    user_id: Identifier(required=True)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(max_length=100, default=DEFAULT_COUNTRY)
    created_at: DateTime()

    @classmethod
    def record(cls, user_id, street, city, zip_code, state=None, country=None, created_at=None):
        from storefront.identity.events import AddressRecorded

        address = cls(
            user_id=user_id,
            street=street,
            city=city,
            state=state,
            zip_code=zip_code,
            country=country or DEFAULT_COUNTRY,
            created_at=created_at,
        )
        address.raise_(
            AddressRecorded(
                address_id=address.id,
                user_id=user_id,
                city=city,
                country=address.country,
            )
        )
        return address


def resolve_address(repo, user_id, street, city, zip_code, state=None, country=None, now=None):
    """Return the user's matching address, creating one when none exists.

    The new address is registered with ``repo`` but only persisted when the
    surrounding Unit of Work commits.
    """
    existing = repo.find_matching(user_id, street, city, zip_code)
    if existing is not None:
        logger.debug("Reusing shipping address", address_id=str(existing.id), user_id=str(user_id))
        return existing

    address = Address.record(
        user_id=user_id,
        street=street,
        city=city,
        zip_code=zip_code,
        state=state,
        country=country,
        created_at=now,
    )
    repo.add(address)
    logger.info("Recorded new shipping address", address_id=str(address.id), user_id=str(user_id))
    return address
