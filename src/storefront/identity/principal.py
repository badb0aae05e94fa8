"""The authenticated caller, decoded from an access token."""

from dataclasses import dataclass

from storefront.exceptions import AuthenticationError, AuthorizationError
from storefront.identity.tokens import ACCESS, decode_token
from storefront.identity.user import Role


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str
    role: Role

    @classmethod
    def from_access_token(cls, token: str) -> "Principal":
        claims = decode_token(token, ACCESS)
        try:
            role = Role(claims.get("role"))
        except ValueError:
            raise AuthenticationError("Invalid or expired token") from None
        return cls(user_id=str(claims["id"]), email=claims.get("email") or "", role=role)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def ensure_admin(self) -> "Principal":
        if not self.is_admin:
            raise AuthorizationError("Admin only")
        return self
