# src/pnl_cards/utils/formatter.py

# --- Built Ins  ---
import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

# --- Local  ---
from ..core.models import FormattedFigures, FormattedPercentage

# Wide enough for any finite double at 20 fixed decimals.
_FIXED_CONTEXT = Context(prec=400)

_LEADING_ZEROS = re.compile(r"0\.(0*)([1-9]\d{0,3})")

COMPACT_NOTATION_THRESHOLD = 0.00001


# --- Rounding Primitives ---
def half_up_round(value: float) -> float:
    """Nearest integer, ties toward positive infinity (-2.5 -> -2, 2.5 -> 3)."""
    floor = math.floor(value)
    return float(floor + 1 if value - floor >= 0.5 else floor)


def to_fixed(value: float, digits: int) -> str:
    """
    Fixed-point rendering of the exact binary value of a float, ties away
    from zero. Unlike f"{value:.2f}" this never rounds half to even.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT)
    return f"{rounded:f}"


def _group_thousands(value: float, max_fraction_digits: int) -> str:
    """Comma-grouped with at most `max_fraction_digits`, trailing zeros dropped."""
    quantum = Decimal(1).scaleb(-max_fraction_digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT)
    text = f"{rounded:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _exponential(value: float, digits: int) -> str:
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


# --- Percentages ---
def round_percentage(value: float) -> float:
    """Integer above 1000%, 2 decimals above 1%, 4 decimals below."""
    magnitude = abs(value)
    if magnitude >= 1000:
        return half_up_round(value)
    if magnitude >= 1:
        return half_up_round(value * 100) / 100
    return half_up_round(value * 10000) / 10000


def format_percentage_text(value: float) -> str:
    prefix = "+" if value >= 0 else "-"
    magnitude = abs(value)
    if magnitude >= 1_000_000:
        return f"{prefix}{to_fixed(magnitude / 1_000_000, 1)}M%"
    if magnitude >= 10_000:
        return f"{prefix}{to_fixed(magnitude / 1_000, 1)}K%"
    if magnitude >= 1_000:
        whole = int(half_up_round(value))
        return f"{'+' if value >= 0 else ''}{whole:,}%"
    if magnitude >= 10:
        return f"{prefix}{to_fixed(magnitude, 1)}%"
    if magnitude >= 1:
        return f"{prefix}{to_fixed(magnitude, 2)}%"
    return f"{prefix}{to_fixed(magnitude, 4)}%"


def format_percentage(value: float) -> FormattedPercentage:
    """
    Both forms are derived from the same raw value; the display text is
    never computed from the rounded number.
    """
    return FormattedPercentage(
        rounded=round_percentage(value),
        text=format_percentage_text(value),
    )


# --- Token Prices ---
def _compact_leading_zeros(price: float) -> str | None:
    match = _LEADING_ZEROS.search(to_fixed(price, 20))
    if not match:
        return None
    zeros, digits = match.groups()
    return f"$0.0{{{len(zeros)}}}{digits}"


def format_token_price(price: float) -> str:
    """
    Human-readable token price. Sub-0.00001 prices use the compact
    leading-zero notation, e.g. 0.0000024 -> "$0.0{5}2400".
    """
    if price <= 0:
        return "$0"
    if price < COMPACT_NOTATION_THRESHOLD:
        compact = _compact_leading_zeros(price)
        if compact:
            return compact
    if price >= 1_000_000:
        return f"${to_fixed(price / 1_000_000, 2)}M"
    if price >= 1_000:
        return f"${_group_thousands(price, 2)}"
    if price >= 1:
        return f"${to_fixed(price, 2)}"
    if price >= 0.01:
        return f"${to_fixed(price, 4)}"
    if price >= COMPACT_NOTATION_THRESHOLD:
        return f"${to_fixed(price, 6)}"
    return f"${_exponential(price, 2)}"


format_price = format_token_price


def format_figures(gain_percentage: float, entry_price: float, current_price: float) -> FormattedFigures:
    return FormattedFigures(
        gain_text=format_percentage_text(gain_percentage),
        entry_price_text=format_token_price(entry_price),
        current_price_text=format_token_price(current_price),
    )
