"""FastAPI dependencies that turn the bearer token into a Principal."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.exceptions import AuthenticationError
from storefront.identity.principal import Principal

_bearer = HTTPBearer(auto_error=False)


def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing token")
    return Principal.from_access_token(credentials.credentials)


def optional_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal | None:
    """Principal when a valid token is sent, otherwise ``None`` (guest checkout)."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return Principal.from_access_token(credentials.credentials)
    except AuthenticationError:
        return None


def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    return principal.ensure_admin()
