"""Profile updates: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    full_name: String(max_length=100)
    email: String(max_length=254)
    address: Text()


@identity.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(
            full_name=command.full_name,
            email=command.email,
            address=command.address,
        )
        repo.add(user)
