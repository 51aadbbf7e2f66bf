"""Score rounding helpers."""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (70.5 -> 71).

    Python's round() sends halves to the even neighbour, which would make
    scores drift by one point on exact .5 totals.
    """
    # trim float noise such as 21.000000000000004 before rounding
    return int(Decimal(repr(round(value, 6))).to_integral_value(rounding=ROUND_HALF_UP))
