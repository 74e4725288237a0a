"""
Tests for the price table, token registry and fixed-point arithmetic.
"""
from decimal import Decimal

import pytest

from nollyspot.core.errors import UnknownTokenError, ValidationFailed
from nollyspot.services.tokens import (
    PRICES,
    NOLLYSPOT,
    NOLLYWOODSPOTLIGHT,
    TokenRegistry,
    price_for,
    refund_amount,
    to_base_units,
)

from conftest import NOLLYSPOT_ADDR, NOLLYWOODSPOT_ADDR, make_settings


class TestPriceTable:

    def test_known_post_types(self):
        assert price_for("PROFILE_POST").amount == 25000
        assert price_for("PROFILE_POST").token == NOLLYSPOT
        assert price_for("BLOG_POST").amount == 100000
        assert price_for("BLOG_POST").token == NOLLYWOODSPOTLIGHT
        assert price_for("WEBSITE_POST").amount == 50000
        assert price_for("WEBSITE_POST").token == NOLLYWOODSPOTLIGHT

    def test_table_is_closed(self):
        assert set(PRICES) == {"PROFILE_POST", "BLOG_POST", "WEBSITE_POST"}

    def test_unknown_post_type_rejected(self):
        with pytest.raises(ValidationFailed, match="Invalid post type"):
            price_for("VIDEO_POST")


class TestTokenRegistry:

    def test_nollyspot_resolves_its_own_address(self):
        registry = TokenRegistry.from_settings(make_settings())

        token = registry.resolve("$NOLLYSPOT")

        assert token.address == NOLLYSPOT_ADDR
        assert token.address != NOLLYWOODSPOT_ADDR
        assert token.decimals == 18

    def test_nollywoodspotlight_resolves_alternate_address(self):
        registry = TokenRegistry.from_settings(make_settings())
        assert registry.resolve("$NOLLYWOODSPOTLIGHT").address == NOLLYWOODSPOT_ADDR

    def test_unknown_symbol_rejected(self):
        registry = TokenRegistry.from_settings(make_settings())
        with pytest.raises(UnknownTokenError, match="Invalid tokenType"):
            registry.resolve("$DOGE")

    def test_unconfigured_address_rejected(self):
        registry = TokenRegistry.from_settings(make_settings(nollyspot_token_address=None))
        with pytest.raises(UnknownTokenError):
            registry.resolve("$NOLLYSPOT")

    def test_decimals_come_from_settings(self):
        registry = TokenRegistry.from_settings(make_settings(token_decimals=6))
        assert registry.resolve("$NOLLYSPOT").decimals == 6


class TestFixedPoint:

    def test_whole_amount(self):
        assert to_base_units(25000, 18) == 25000 * 10 ** 18

    def test_fractional_float_amount_is_exact(self):
        assert to_base_units(0.1, 18) == 10 ** 17

    def test_decimal_amount(self):
        assert to_base_units(Decimal("97500.000"), 6) == 97500 * 10 ** 6

    def test_too_many_decimal_places_rejected(self):
        with pytest.raises(ValidationFailed, match="decimal places"):
            to_base_units("1.0000001", 6)

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_rejected(self, amount):
        with pytest.raises(ValidationFailed):
            to_base_units(amount, 18)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationFailed, match="Invalid amount"):
            to_base_units("ten", 18)


class TestRefundAmount:

    def test_default_fee(self):
        assert refund_amount(100000, 2.5) == 97500

    def test_fee_applied_to_fractional_amount(self):
        assert refund_amount(10, 2.5) == Decimal("9.75")

    def test_zero_fee_refunds_everything(self):
        assert refund_amount(25000, 0) == 25000

    def test_fee_out_of_range_rejected(self):
        with pytest.raises(ValidationFailed):
            refund_amount(100, 150)

    def test_computed_amount_rounds_down_when_asked(self):
        amount = refund_amount(Decimal("1.000001"), 2.5)

        assert to_base_units(amount, 6, round_down=True) == 975000
        with pytest.raises(ValidationFailed, match="decimal places"):
            to_base_units(amount, 6)

    def test_rounding_down_to_zero_rejected(self):
        with pytest.raises(ValidationFailed, match="below one base unit"):
            to_base_units(Decimal("0.0000009"), 6, round_down=True)

    def test_large_amount_keeps_every_digit(self):
        amount = Decimal("98765432109876.123456789012345678")
        assert to_base_units(amount, 18) == 98765432109876123456789012345678
        assert refund_amount(amount, 0) == amount
