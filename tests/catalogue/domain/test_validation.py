"""Tests for catalogue input rules: slugs, prices, currencies."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.validation import normalize_currency, parse_price_cents, validate_slug


class TestValidateSlug:
    def test_lowercases_and_trims(self):
        assert validate_slug("  Linen-Cushion-2 ") == "linen-cushion-2"

    @pytest.mark.parametrize("slug", ["", None, "   "])
    def test_required(self, slug):
        with pytest.raises(ValidationError) as exc:
            validate_slug(slug)
        assert exc.value.messages == {"slug": ["Slug is required"]}

    @pytest.mark.parametrize("slug", ["linen cushion", "linen_cushion", "café", "linen/cushion"])
    def test_rejects_characters_outside_the_alphabet(self, slug):
        with pytest.raises(ValidationError):
            validate_slug(slug)


class TestParsePriceCents:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1250, 1250),
            ("1250", 1250),
            ("12.50", 1250),
            ("12.5", 1250),
            (12.5, 1250),
            ("0.015", 2),
            ("0", 0),
        ],
    )
    def test_accepted_prices(self, value, expected):
        assert parse_price_cents(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "-1", "-0.50", "NaN", "inf", "12.5.0", True])
    def test_rejected_prices(self, value):
        with pytest.raises(ValidationError):
            parse_price_cents(value)


class TestNormalizeCurrency:
    def test_defaults(self):
        assert normalize_currency(None, "GBP") == "GBP"
        assert normalize_currency("  ", "GBP") == "GBP"

    def test_uppercases(self):
        assert normalize_currency("eur", "GBP") == "EUR"

    def test_rejects_non_iso_codes(self):
        with pytest.raises(ValidationError):
            normalize_currency("EURO", "GBP")
