"""User registration — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.identity.passwords import hash_password
from storefront.identity.refresh_token import RefreshToken
from storefront.identity.tokens import IssuedTokens, issue_access_token, issue_refresh_token
from storefront.identity.user import User, normalize_email
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a customer account and sign it in."""

    name: String(max_length=100)
    email: String(max_length=254)
    password: String(max_length=255)


def start_session(user: User) -> IssuedTokens:
    """Issue an access/refresh pair and persist the refresh token.

    Runs inside the caller's unit of work, so the RefreshToken record commits
    together with whatever else the handler changed.
    """
    refresh_token, expires_at = issue_refresh_token(str(user.id))
    current_domain.repository_for(RefreshToken).add(
        RefreshToken(
            user_id=str(user.id),
            token=refresh_token,
            expires_at=expires_at,
        )
    )
    return IssuedTokens(
        access_token=issue_access_token(str(user.id), user.role, user.email),
        refresh_token=refresh_token,
        user=user.to_public(),
    )


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        name = (command.name or "").strip()
        email = normalize_email(command.email)
        if not name or not email or not command.password:
            raise ValidationError({"_entity": ["Missing name, email, or password"]})

        repo = current_domain.repository_for(User)
        if repo.find_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = User.register(name=name, email=email, password_hash=hash_password(command.password))
        repo.add(user)
        logger.info("User registered", user_id=str(user.id))

        return start_session(user)
