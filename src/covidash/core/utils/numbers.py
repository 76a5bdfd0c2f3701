import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Optional

from babel.numbers import format_decimal

from covidash.core.constants import NAN_STATISTICS, NUMBER_LOCALE

# Indian grouping (12,34,567) with at most one fraction digit
INDIAN_DECIMAL_PATTERN = "#,##,##0.#"

# largest first: (divisor, suffix)
ABBREVIATIONS = (
    (1e14, "L Cr"),
    (1e10, "K Cr"),
    (1e7, "Cr"),
    (1e5, "L"),
    (1e3, "K"),
)


def format_decimal_in(value, locale: str = NUMBER_LOCALE) -> str:
    """Format a number with Indian digit grouping, rounding half up to one decimal."""
    with localcontext() as ctx:
        ctx.rounding = ROUND_HALF_UP
        return format_decimal(Decimal(str(value)), format=INDIAN_DECIMAL_PATTERN, locale=locale)


def abbreviate_number(number) -> str:
    """Shorten a number with Indian units: K, L (lakh), Cr (crore), K Cr, L Cr."""
    magnitude = abs(number)
    for divisor, suffix in ABBREVIATIONS:
        if magnitude >= divisor:
            return format_decimal_in(number / divisor) + suffix
    return format_decimal_in(number)


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_number(
    value,
    option: Optional[str] = None,
    statistic: Optional[str] = None,
    nan_statistics: Iterable[str] = NAN_STATISTICS,
) -> str:
    """Format a dashboard figure.

    option:
        "short" abbreviates (1.2L), "int" floors first, "%" appends a percent sign.

    A 0 reported for a statistic in ``nan_statistics`` counts as not reported.
    Missing values render as "-".
    """
    if statistic and statistic in nan_statistics and value == 0:
        value = None

    if _is_missing(value):
        return "-"
    if option == "short":
        return abbreviate_number(value)
    if option == "int" and math.isfinite(value):
        value = math.floor(value)
    return format_decimal_in(value) + ("%" if option == "%" else "")
