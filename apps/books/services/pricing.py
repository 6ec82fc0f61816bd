"""Point pricing for donations and redemptions."""

from decimal import Decimal, ROUND_FLOOR

from django.conf import settings


def _rate(name: str) -> Decimal:
    return Decimal(str(settings.MARKETPLACE[name]))


def _floor_share(reference_price: int, rate: Decimal) -> int:
    return int((Decimal(reference_price) * rate).to_integral_value(rounding=ROUND_FLOOR))


def compute_award(reference_price: int) -> int:
    """Points credited to the donor when a book is approved."""
    return _floor_share(reference_price, _rate('AWARD_RATE'))


def compute_redemption_price(reference_price: int) -> int:
    """Points a redeemer pays for a book; fixed when the book is submitted."""
    return _floor_share(reference_price, _rate('REDEMPTION_RATE'))
