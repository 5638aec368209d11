"""Account status management: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class ChangeUserStatus:
    """Block (``0``) or unblock (``1``) an account."""

    user_id: Identifier(required=True)
    status: Integer(required=True)


@identity.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(ChangeUserStatus)
    def change_status(self, command):
        if command.status not in (0, 1):
            raise ValidationError({"status": ["Invalid status value"]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if command.status == 1:
            user.unblock()
        else:
            user.block()
        repo.add(user)
