"""Input rules shared by product and category management."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def validate_slug(value: str | None) -> str:
    """Return the normalized (trimmed, lower-cased) slug or raise."""
    slug = (value or "").strip().lower()
    if not slug:
        raise ValidationError({"slug": ["Slug is required"]})
    if not _SLUG_PATTERN.match(slug):
        raise ValidationError({"slug": ["Slug must be lowercase letters, numbers, or hyphens"]})
    return slug


def normalize_currency(value: str | None, default: str) -> str:
    currency = (value or "").strip().upper() or default
    if not _CURRENCY_PATTERN.match(currency):
        raise ValidationError({"currency": [f"Unsupported currency: {currency}"]})
    return currency


def parse_price_cents(value) -> int:
    """Interpret a submitted price.

    Integers (and integer strings) are already minor units. Anything written
    with a decimal point is a major-unit amount: ``"12.50"`` becomes ``1250``.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError({"price_cents": ["Price (in minor units) is invalid"]})

    text = str(value).strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValidationError({"price_cents": ["Price (in minor units) is invalid"]}) from None

    if not amount.is_finite():
        raise ValidationError({"price_cents": ["Price (in minor units) is invalid"]})

    if "." in text:
        amount = (amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    elif amount != amount.to_integral_value():
        raise ValidationError({"price_cents": ["Price (in minor units) is invalid"]})

    if amount < 0:
        raise ValidationError({"price_cents": ["Price (in minor units) is invalid"]})
    return int(amount)
