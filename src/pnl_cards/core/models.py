# src/pnl_cards/core/models.py

# --- Built Ins  ---
import base64
from typing import Optional

# --- Installed  ---
from pydantic import BaseModel, ConfigDict, Field, computed_field

# --- Local  ---
from .enums import DEFAULT_THEME, Theme

MIN_PRICE = 1e-20
MAX_PRICE = 1e15
MAX_TICKER_LENGTH = 20
MAX_TAG_LENGTH = 50
MAX_TIMESTAMP_LENGTH = 100


class AppBaseModel(BaseModel):
    """Base model for all card pipeline data contracts."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# --- Validation Boundary ---


class ValidatedRequest(AppBaseModel):
    """
    A request whose every field has passed its own constraint.
    Only the request validator builds these; the field constraints below
    repeat the validator's rules so a partially valid request cannot exist.
    """

    ticker: str = Field(..., min_length=1, max_length=MAX_TICKER_LENGTH, pattern=r"^[A-Z0-9$]+$")
    entry_price: float = Field(..., gt=0, ge=MIN_PRICE, le=MAX_PRICE)
    current_price: float = Field(..., ge=0, le=MAX_PRICE)
    theme: Theme = DEFAULT_THEME
    wallet_tag: Optional[str] = Field(default=None, max_length=MAX_TAG_LENGTH)
    timestamp: Optional[str] = Field(default=None, max_length=MAX_TIMESTAMP_LENGTH)


class FieldError(AppBaseModel):
    field: str
    message: str


class ValidationFailure(AppBaseModel):
    """Every field-level error found in one request, in field order."""

    errors: list[FieldError] = Field(..., min_length=1)

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    @property
    def field_names(self) -> list[str]:
        return [error.field for error in self.errors]


# --- Calculation Results ---


class GainResult(AppBaseModel):
    percentage: float
    is_profit: bool


class FormattedPercentage(AppBaseModel):
    rounded: float
    text: str


class FormattedFigures(AppBaseModel):
    gain_text: str
    entry_price_text: str
    current_price_text: str


class PnLResult(AppBaseModel):
    """The raw gain together with its rounded and display forms."""

    gain: GainResult
    formatted: FormattedPercentage

    @computed_field
    @property
    def percentage_gain(self) -> float:
        return self.formatted.rounded

    @computed_field
    @property
    def formatted_gain(self) -> str:
        return self.formatted.text

    @computed_field
    @property
    def is_profit(self) -> bool:
        return self.gain.is_profit


# --- Service Output ---


class CardMetadata(AppBaseModel):
    ticker: str
    gain_percentage: float
    formatted_gain: str
    is_profit: bool
    theme: Theme


class CardResult(AppBaseModel):
    image: bytes
    metadata: CardMetadata

    def data_uri(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.image).decode("ascii")
