"""Sign-in, token refresh and sign-out."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import AuthenticationError
from storefront.identity.passwords import verify_password
from storefront.identity.refresh_token import RefreshToken
from storefront.identity.registration import start_session
from storefront.identity.tokens import REFRESH, decode_token, issue_access_token
from storefront.identity.user import User, normalize_email
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class LogIn:
    email: String(max_length=254)
    password: String(max_length=255)


@storefront.command(part_of="RefreshToken")
class LogOut:
    """Revoke a refresh token. Unknown or already revoked tokens are accepted."""

    refresh_token: Text()


@storefront.command_handler(part_of=User)
class LogInHandler:
    @handle(LogIn)
    def log_in(self, command):
        email = normalize_email(command.email)
        if not email or not command.password:
            raise ValidationError({"_entity": ["Missing email or password"]})

        user = current_domain.repository_for(User).find_by_email(email)
        if user is None or not verify_password(command.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        logger.info("User signed in", user_id=str(user.id))
        return start_session(user)


@storefront.command_handler(part_of=RefreshToken)
class LogOutHandler:
    @handle(LogOut)
    def log_out(self, command):
        if not command.refresh_token:
            return 0

        repo = current_domain.repository_for(RefreshToken)
        revoked = 0
        for record in repo.find_by_token(command.refresh_token):
            if not record.revoked:
                record.revoke()
                repo.add(record)
                revoked += 1
        return revoked


def refresh_access_token(refresh_token: str | None) -> str:
    """Mint a new access token from a live refresh token.

    Role and email are re-read from storage so role changes apply without a
    fresh login. The refresh token itself is not rotated.
    """
    if not refresh_token:
        raise AuthenticationError("Missing refresh token")

    claims = decode_token(refresh_token, REFRESH)

    if current_domain.repository_for(RefreshToken).find_live(refresh_token) is None:
        raise AuthenticationError("Invalid refresh")

    try:
        user = current_domain.repository_for(User).get(claims["id"])
    except ObjectNotFoundError:
        raise AuthenticationError("User not found") from None

    return issue_access_token(str(user.id), user.role, user.email)


def load_profile(user_id: str) -> dict | None:
    try:
        return current_domain.repository_for(User).get(user_id).to_public()
    except ObjectNotFoundError:
        return None
