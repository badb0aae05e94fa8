"""User aggregate — a registered shopper or administrator."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.events import UserPasswordChanged, UserRegistered, UserRoleChanged


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


def normalize_email(value: str | None) -> str:
    """Emails are compared case-insensitively and stored trimmed and lower-cased."""
    return (value or "").strip().lower()


@storefront.aggregate
class User:
    """A person who can sign in.

    The email is the login identifier and is unique across users. Only the
    password hash is ever stored; the public view (``to_public``) never
    includes it.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def email_must_be_well_formed(self):
        local_part, _, domain_part = (self.email or "").partition("@")
        if not local_part or not domain_part or "@" in domain_part or " " in self.email:
            raise ValidationError({"email": ["Invalid email address"]})

    @classmethod
    def register(cls, name, email, password_hash, role=Role.CUSTOMER):
        user = cls(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=role.value,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return Role(self.role) is Role.ADMIN

    def change_password(self, password_hash):
        self.password_hash = password_hash
        self.raise_(UserPasswordChanged(user_id=str(self.id)))

    def change_role(self, role: Role):
        if Role(self.role) is role:
            return
        previous = self.role
        self.role = role.value
        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous,
                new_role=role.value,
            )
        )

    def to_public(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first
