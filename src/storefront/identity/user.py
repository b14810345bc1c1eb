"""User aggregate: storefront accounts and their coarse role flag."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from storefront.domain import storefront


class UserRole(Enum):
    """Coarse authorization flag; ADMIN unlocks the dashboard."""

    ADMIN = "ADMIN"
    USER = "USER"


@storefront.aggregate
class User:
    """A person who can sign in, fill a cart and place orders.

    Only the credential hash is stored. Hashing and verification live in
    ``storefront.identity.security`` so the aggregate never sees a raw password.
    """

    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    name: String(required=True, max_length=100)
    role: String(choices=UserRole, default=UserRole.USER.value)
    created_at: DateTime()

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @classmethod
    def register(cls, email, password_hash, name, role=UserRole.USER.value):
        from storefront.identity.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            email=email.strip().lower(),
            password_hash=password_hash,
            name=name,
            role=role,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                name=name,
                role=role,
                registered_at=now,
            )
        )
        return user
