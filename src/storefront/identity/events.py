"""Domain events for the User and RefreshToken aggregates."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    role: String(required=True, max_length=20)


@storefront.event(part_of="User")
class UserPasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)


@storefront.event(part_of="User")
class UserRoleChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True, max_length=20)
    new_role: String(required=True, max_length=20)


@storefront.event(part_of="RefreshToken")
class RefreshTokenRevoked:
    """A refresh token was revoked at logout and can no longer mint access tokens."""

    __version__ = 1

    token_id: Identifier(required=True)
    user_id: Identifier(required=True)
