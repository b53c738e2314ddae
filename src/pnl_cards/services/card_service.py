# src/pnl_cards/services/card_service.py

# --- Built Ins  ---
import time
from datetime import datetime
from typing import Any, Callable, Optional

# --- Installed  ---
from loguru import logger as log

# --- Local  ---
from ..core.exceptions import RenderError, RequestValidationError
from ..core.models import CardMetadata, CardResult, ValidatedRequest, ValidationFailure
from ..pnl.calculator import calculate_pnl
from ..rendering.composer import compose_card
from ..rendering.matplotlib_surface import MatplotlibSurface
from ..rendering.surface import SurfaceFactory
from ..utils.formatter import format_token_price
from ..validation.request_validator import extract_body, validate

TIMESTAMP_FORMAT = "%b %d, %Y, %I:%M %p"


class CardService:
    """Runs a raw request through validation, gain calculation, formatting and rendering."""

    def __init__(
        self,
        surface_factory: SurfaceFactory = MatplotlibSurface,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._surface_factory = surface_factory
        self._clock = clock or datetime.now

    def default_timestamp(self) -> str:
        return self._clock().strftime(TIMESTAMP_FORMAT)

    def generate(self, raw: Any) -> CardResult:
        """
        Raises:
            RequestValidationError: one or more fields failed validation.
            DomainError: the price pair has no defined gain.
            RenderError: the drawing backend failed.
        """
        start = time.perf_counter()

        outcome = validate(extract_body(raw))
        if isinstance(outcome, ValidationFailure):
            raise RequestValidationError(outcome)
        request: ValidatedRequest = outcome

        pnl = calculate_pnl(request.entry_price, request.current_price)

        if request.timestamp is None:
            request = request.model_copy(update={"timestamp": self.default_timestamp()})

        try:
            image = compose_card(request, pnl.gain, surface_factory=self._surface_factory)
        except RenderError:
            log.exception(f"Card render failed for {request.ticker} [{request.theme.value}]")
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        log.info(f"Card: {request.ticker} {pnl.formatted_gain} [{elapsed_ms:.0f}ms]")

        return CardResult(
            image=image,
            metadata=CardMetadata(
                ticker=request.ticker,
                gain_percentage=pnl.percentage_gain,
                formatted_gain=pnl.formatted_gain,
                is_profit=pnl.is_profit,
                theme=request.theme,
            ),
        )


# --- Diagnostics ---

SAMPLE_SCENARIOS = (
    (0.0000024, 0.0000120, "Meme 5x"),
    (0.10, 0.05, "50% loss"),
    (100, 150, "50% gain"),
    (0.00000001, 0.0001, "10000x"),
    (50000, 25000, "BTC drop"),
)


def sample_calculations() -> list[dict[str, Any]]:
    """Formatted figures for a fixed set of price pairs, used by the debug routes."""
    results = []
    for entry, current, description in SAMPLE_SCENARIOS:
        pnl = calculate_pnl(entry, current)
        results.append(
            {
                "desc": description,
                "entry": entry,
                "current": current,
                "entryFmt": format_token_price(entry),
                "currentFmt": format_token_price(current),
                "result": {
                    "percentageGain": pnl.percentage_gain,
                    "isProfit": pnl.is_profit,
                    "formattedGain": pnl.formatted_gain,
                },
            }
        )
    return results


def sample_request(profit: bool, theme: str, timestamp: str) -> dict[str, Any]:
    entry, current = (0.0000024, 0.0000120) if profit else (0.10, 0.05)
    return {
        "ticker": "PEPE" if profit else "WOJAK",
        "entry_price": entry,
        "current_price": current,
        "theme": theme,
        "wallet_tag": "0x1234...abcd",
        "timestamp": timestamp,
    }
