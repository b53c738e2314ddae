# src/pnl_cards/utils/sanitizer.py

# --- Built Ins  ---
import re
from typing import Any

# --- Local  ---
from ..core.models import MAX_TICKER_LENGTH

_UNSAFE_CHARS = re.compile(r"[\x00-\x1F\x7F<>]")
_NON_TICKER_CHARS = re.compile(r"[^A-Z0-9$]")


def sanitize_string(value: Any, max_length: int = 100) -> str:
    """
    Drops ASCII control characters and angle brackets, trims, then truncates.
    Anything that is not a string sanitizes to "".
    """
    if not isinstance(value, str):
        return ""
    return _UNSAFE_CHARS.sub("", value).strip()[:max_length]


def sanitize_ticker(value: Any) -> str:
    """Upper-cases and keeps only A-Z, 0-9 and '$' (e.g. '<script>' -> 'SCRIPT')."""
    if not isinstance(value, str):
        return ""
    return _NON_TICKER_CHARS.sub("", value.upper())[:MAX_TICKER_LENGTH]
