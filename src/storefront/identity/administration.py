"""Administrator bootstrap — create or promote an admin account and set its password."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.passwords import hash_password
from storefront.identity.user import Role, User, normalize_email
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class ResetAdminCredentials:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=255)
    name: String(max_length=100, default="Admin")


@storefront.command_handler(part_of=User)
class ResetAdminCredentialsHandler:
    @handle(ResetAdminCredentials)
    def reset_admin_credentials(self, command):
        email = normalize_email(command.email)
        if not email or not command.password:
            raise ValidationError({"_entity": ["Email and password are required"]})

        repo = current_domain.repository_for(User)
        password_hash = hash_password(command.password)
        user = repo.find_by_email(email)

        if user is None:
            user = User.register(
                name=command.name or "Admin",
                email=email,
                password_hash=password_hash,
                role=Role.ADMIN,
            )
            logger.info("Admin account created", user_id=str(user.id))
        else:
            user.change_password(password_hash)
            user.change_role(Role.ADMIN)
            logger.info("Admin credentials reset", user_id=str(user.id))

        repo.add(user)
        return str(user.id)
