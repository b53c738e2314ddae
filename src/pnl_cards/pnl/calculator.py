# src/pnl_cards/pnl/calculator.py

# --- Local  ---
from ..core.exceptions import InvalidCurrentPrice, InvalidEntryPrice
from ..core.models import GainResult, PnLResult
from ..utils.formatter import format_percentage


def compute_gain(entry_price: float, current_price: float) -> GainResult:
    """
    Signed percentage change from entry to current price.

    Break-even counts as a profit. Both inputs are expected to be finite;
    the validator guarantees this for request data.

    Raises:
        InvalidEntryPrice: entry_price <= 0
        InvalidCurrentPrice: current_price < 0
    """
    if entry_price <= 0:
        raise InvalidEntryPrice()
    if current_price < 0:
        raise InvalidCurrentPrice()

    percentage = (current_price - entry_price) / entry_price * 100
    return GainResult(percentage=percentage, is_profit=percentage >= 0)


def calculate_pnl(entry_price: float, current_price: float) -> PnLResult:
    gain = compute_gain(entry_price, current_price)
    return PnLResult(gain=gain, formatted=format_percentage(gain.percentage))
