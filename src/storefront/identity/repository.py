"""Repositories for identity aggregates."""

from storefront.domain import storefront
from storefront.identity.addresses import Address
from storefront.identity.user import User, UserRole


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Find a user by email, compared case-insensitively."""
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def count_by_role(self, role: UserRole) -> int:
        return self._dao.query.filter(role=role.value).all().total


@storefront.repository(part_of=Address)
class AddressRepository:
    def find_matching(self, user_id, street, city, zip_code) -> Address | None:
        """Find the user's address whose street, city and zip match exactly."""
        return (
            self._dao.query.filter(
                user_id=str(user_id),
                street=street,
                city=city,
                zip_code=zip_code,
            )
            .all()
            .first
        )
