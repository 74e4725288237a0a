"""
Token and price configuration.

Static price table per post type, token registry per symbol and the
fixed-point / fee arithmetic shared by payments and refunds.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Dict, Optional

from nollyspot.core.config import Settings
from nollyspot.core.errors import UnknownTokenError, ValidationFailed

NOLLYSPOT = "$NOLLYSPOT"
NOLLYWOODSPOTLIGHT = "$NOLLYWOODSPOTLIGHT"

# enough digits for any uint256
PRECISION = 78


@dataclass(frozen=True)
class Price:
    amount: int
    token: str


# price in human token units
PRICES: Dict[str, Price] = {
    "PROFILE_POST": Price(amount=25000, token=NOLLYSPOT),
    "BLOG_POST": Price(amount=100000, token=NOLLYWOODSPOTLIGHT),
    "WEBSITE_POST": Price(amount=50000, token=NOLLYWOODSPOTLIGHT),
}


def price_for(post_type: str) -> Price:
    price = PRICES.get(post_type)
    if price is None:
        raise ValidationFailed("Invalid post type")
    return price


@dataclass(frozen=True)
class Token:
    symbol: str
    address: str
    decimals: int


class TokenRegistry:
    """Maps token symbols to their configured ERC-20 contracts."""

    def __init__(self, addresses: Dict[str, Optional[str]], decimals: int = 18) -> None:
        self._addresses = addresses
        self.decimals = decimals

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenRegistry":
        return cls(
            {
                NOLLYSPOT: settings.nollyspot_token_address,
                NOLLYWOODSPOTLIGHT: settings.nollywoodspot_token_address,
            },
            decimals=settings.token_decimals,
        )

    def resolve(self, symbol: str) -> Token:
        address = self._addresses.get(symbol)
        if not address:
            raise UnknownTokenError("Invalid tokenType")
        return Token(symbol=symbol, address=address, decimals=self.decimals)


def to_decimal(amount) -> Decimal:
    # str() first so floats keep their short repr (0.1 -> "0.1")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValidationFailed(f"Invalid amount: {amount!r}")
    if not value.is_finite():
        raise ValidationFailed(f"Invalid amount: {amount!r}")
    return value


def to_base_units(amount, decimals: int, round_down: bool = False) -> int:
    """
    Convert a human amount to the token's integer representation.

    Caller-supplied amounts with more fractional digits than the token
    supports are rejected. Computed amounts (refunds) pass round_down=True
    and lose the dust below one base unit instead.
    """
    value = to_decimal(amount)
    if value <= 0:
        raise ValidationFailed("amount must be > 0")

    with localcontext() as ctx:
        ctx.prec = PRECISION
        scaled = value.scaleb(decimals)
        units = scaled.to_integral_value(rounding=ROUND_DOWN)
    if units != scaled and not round_down:
        raise ValidationFailed(f"amount has more than {decimals} decimal places")
    if units <= 0:
        raise ValidationFailed(f"amount is below one base unit at {decimals} decimals")
    return int(units)


def from_base_units(units: int, decimals: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return Decimal(units).scaleb(-decimals)


def refund_amount(amount, fee_percent) -> Decimal:
    """amount * (1 - fee_percent / 100), in human units."""
    fee = to_decimal(fee_percent)
    if fee < 0 or fee > 100:
        raise ValidationFailed("fee percent must be between 0 and 100")
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return to_decimal(amount) * (Decimal(1) - fee / Decimal(100))
