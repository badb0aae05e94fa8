"""Password hashing with bcrypt (through passlib)."""

from functools import lru_cache

from passlib.context import CryptContext

from storefront.config import get_settings


@lru_cache
def _crypt_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str) -> str:
    return _crypt_context(get_settings().bcrypt_rounds).hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored hash; unreadable hashes never match."""
    if not password or not password_hash:
        return False
    try:
        return _crypt_context(get_settings().bcrypt_rounds).verify(password, password_hash)
    except ValueError:
        return False
