"""RefreshToken aggregate — server-side record that makes refresh tokens revocable."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, Text

from storefront.domain import storefront
from storefront.identity.events import RefreshTokenRevoked
from storefront.utils.dates import as_utc


@storefront.aggregate
class RefreshToken:
    user_id: Identifier(required=True)
    token: Text(required=True)
    revoked: Boolean(default=False)
    expires_at: DateTime(required=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))

    def is_live(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        return not self.revoked and as_utc(self.expires_at) > as_utc(now)

    def revoke(self):
        if self.revoked:
            return
        self.revoked = True
        self.raise_(RefreshTokenRevoked(token_id=str(self.id), user_id=str(self.user_id)))


@storefront.repository(part_of=RefreshToken)
class RefreshTokenRepository:
    def find_by_token(self, token: str) -> list[RefreshToken]:
        return self._dao.query.filter(token=token).all().items

    def find_live(self, token: str) -> RefreshToken | None:
        return next((record for record in self.find_by_token(token) if record.is_live()), None)
