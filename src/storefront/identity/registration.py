"""User registration: command and handler.

The command carries the credential hash, never the raw password, since
commands are recorded in the event store.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User, UserRole


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new storefront account."""

    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    name: String(required=True, max_length=100)
    role: String(choices=UserRole, default=UserRole.USER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(
            email=command.email,
            password_hash=command.password_hash,
            name=command.name,
            role=command.role or UserRole.USER.value,
        )
        repo.add(user)
        return str(user.id)
