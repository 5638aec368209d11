"""User registration: command and handler."""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User
from shared.errors import ConflictError
from shared.logging import get_logger

logger = get_logger(__name__)


@identity.command(part_of="User")
class RegisterUser:
    """Create a new account; the phone number must not be taken."""

    phone: String(required=True, max_length=10)
    password: String(required=True, max_length=128)
    full_name: String(required=True, max_length=100)
    email: String(max_length=254)
    address: Text()
    account_type: String(max_length=20)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.by_phone(command.phone) is not None:
            raise ConflictError("User already exists", phone=command.phone)

        user = User.register(
            phone=command.phone,
            password=command.password,
            full_name=command.full_name,
            email=command.email,
            address=command.address,
            account_type=command.account_type,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), account_type=user.account_type)
        return str(user.id)
