# src/pnl_cards/validation/request_validator.py

# --- Built Ins  ---
import math
from typing import Any, Mapping

# --- Local  ---
from ..core.enums import DEFAULT_THEME, Theme
from ..core.models import (
    MAX_PRICE,
    MAX_TAG_LENGTH,
    MAX_TICKER_LENGTH,
    MAX_TIMESTAMP_LENGTH,
    MIN_PRICE,
    FieldError,
    ValidatedRequest,
    ValidationFailure,
)
from ..utils.sanitizer import sanitize_string, sanitize_ticker

REQUEST_FIELDS = ("ticker", "entry_price", "current_price", "theme", "wallet_tag", "timestamp")


def extract_body(raw: Any) -> dict[str, Any]:
    """
    Unwraps a single `{"body": {...}}` envelope, as sent by some gateways,
    and keeps only the known request fields. Deeper nesting is not unwrapped.
    """
    if not isinstance(raw, Mapping):
        return {}
    inner = raw.get("body")
    data = inner if isinstance(inner, Mapping) else raw
    return {name: data.get(name) for name in REQUEST_FIELDS}


def _as_finite_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _check_ticker(value: Any, errors: list[FieldError]) -> str | None:
    if not isinstance(value, str) or not value.strip():
        errors.append(FieldError(field="ticker", message="ticker is required"))
        return None
    if len(value) > MAX_TICKER_LENGTH:
        errors.append(FieldError(field="ticker", message=f"ticker must be {MAX_TICKER_LENGTH} characters or less"))
        return None
    ticker = sanitize_ticker(value)
    if not ticker:
        errors.append(FieldError(field="ticker", message="ticker must contain at least one of A-Z, 0-9 or $"))
        return None
    return ticker


def _check_entry_price(value: Any, errors: list[FieldError]) -> float | None:
    if value is None:
        errors.append(FieldError(field="entry_price", message="entry_price is required"))
        return None
    price = _as_finite_number(value)
    if price is None:
        errors.append(FieldError(field="entry_price", message="entry_price must be a valid number"))
    elif price <= 0:
        errors.append(FieldError(field="entry_price", message="entry_price must be greater than zero"))
    elif price < MIN_PRICE or price > MAX_PRICE:
        errors.append(FieldError(field="entry_price", message="entry_price out of range"))
    else:
        return price
    return None


def _check_current_price(value: Any, errors: list[FieldError]) -> float | None:
    if value is None:
        errors.append(FieldError(field="current_price", message="current_price is required"))
        return None
    price = _as_finite_number(value)
    if price is None:
        errors.append(FieldError(field="current_price", message="current_price must be a valid number"))
    elif price < 0:
        errors.append(FieldError(field="current_price", message="current_price cannot be negative"))
    elif price > MAX_PRICE:
        errors.append(FieldError(field="current_price", message="current_price out of range"))
    else:
        return price
    return None


def _check_theme(value: Any, errors: list[FieldError]) -> Theme:
    if value is None:
        return DEFAULT_THEME
    if value not in Theme.names():
        errors.append(FieldError(field="theme", message=f"theme must be: {', '.join(Theme.names())}"))
        return DEFAULT_THEME
    return Theme(value)


def _check_text(name: str, value: Any, max_length: int, errors: list[FieldError]) -> str | None:
    # The ceiling applies to the raw string, before anything is stripped.
    if value is None:
        return None
    if not isinstance(value, str) or len(value) > max_length:
        errors.append(FieldError(field=name, message=f"{name} invalid"))
        return None
    if not value:
        return None
    return sanitize_string(value, max_length)


def validate(raw: Any) -> ValidatedRequest | ValidationFailure:
    """
    Turns an untyped field bag into a ValidatedRequest, or reports every
    field-level problem at once as a ValidationFailure.

    The caller is expected to have already unwrapped any `body` envelope
    (see `extract_body`); unknown keys are ignored.
    """
    data = raw if isinstance(raw, Mapping) else {}
    errors: list[FieldError] = []

    ticker = _check_ticker(data.get("ticker"), errors)
    entry_price = _check_entry_price(data.get("entry_price"), errors)
    current_price = _check_current_price(data.get("current_price"), errors)
    theme = _check_theme(data.get("theme"), errors)
    wallet_tag = _check_text("wallet_tag", data.get("wallet_tag"), MAX_TAG_LENGTH, errors)
    timestamp = _check_text("timestamp", data.get("timestamp"), MAX_TIMESTAMP_LENGTH, errors)

    if errors:
        return ValidationFailure(errors=errors)

    return ValidatedRequest(
        ticker=ticker,
        entry_price=entry_price,
        current_price=current_price,
        theme=theme,
        wallet_tag=wallet_tag,
        timestamp=timestamp,
    )
