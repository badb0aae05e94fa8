"""Storefront-specific failures.

Input errors use protean's ``ValidationError`` and missing records use
``ObjectNotFoundError``; the classes here cover what protean has no name for.
"""


class StorefrontError(Exception):
    """Base class carrying a short, client-safe message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(StorefrontError):
    """Missing, malformed, expired or revoked credentials."""


class AuthorizationError(StorefrontError):
    """Authenticated, but the role does not allow the operation."""


class ConflictError(StorefrontError):
    """A uniqueness rule would be violated (email, slug)."""


class PaymentGatewayError(StorefrontError):
    """The payment processor could not be reached or refused the request."""


class WebhookVerificationError(StorefrontError):
    """A payment callback failed signature verification or could not be parsed."""
