"""Pari-mutuel odds and payout calculations.

Pure functions over Decimal amounts. Odds are total pool divided by the stake
on one side; when either side has no stake the fair-coin default applies.
"""

from decimal import ROUND_HALF_UP, Decimal

DEFAULT_ODDS = Decimal("2.0")


def quantum(places: int) -> Decimal:
    """Smallest unit for the given number of decimal places (e.g. 2 -> 0.01)."""
    if places < 0:
        raise ValueError(f"Decimal places must be non-negative, got {places}")
    return Decimal(1).scaleb(-places)


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Convert an input amount to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def check_amount(value: Decimal, places: int, maximum: Decimal) -> None:
    """Raise ValueError unless `value` fits the configured precision and ceiling."""
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {value}")
    if value.as_tuple().exponent < -places:
        raise ValueError(f"Amount {value} has more than {places} decimal places")
    if value > maximum:
        raise ValueError(f"Amount {value} exceeds the maximum of {maximum}")


def calculate_odds(
    side_total: Decimal,
    other_total: Decimal,
    places: int = 2,
    default: Decimal = DEFAULT_ODDS,
) -> Decimal:
    """Decimal odds for one side of a two-sided pool."""
    if side_total < 0 or other_total < 0:
        raise ValueError("Pool totals must be non-negative")

    total_pool = side_total + other_total
    if side_total == 0 or other_total == 0 or total_pool == 0:
        return default

    return (total_pool / side_total).quantize(quantum(places), rounding=ROUND_HALF_UP)


def calculate_winnings(amount: Decimal, odds: Decimal, places: int = 4) -> Decimal:
    """Amount credited for a winning stake: stake times odds, rounded."""
    if amount < 0:
        raise ValueError(f"Stake must be non-negative, got {amount}")
    return (amount * odds).quantize(quantum(places), rounding=ROUND_HALF_UP)


def share_percent(side_total: Decimal, total_pool: Decimal) -> float:
    """Side's share of the pool in percent; an empty pool splits 50/50."""
    if total_pool <= 0:
        return 50.0
    return float(side_total / total_pool * 100)
