# src/pnl_cards/rendering/palette.py

# --- Built Ins  ---
from typing import Optional

# --- Installed  ---
from pydantic import Field

# --- Local  ---
from ..core.enums import Theme
from ..core.models import AppBaseModel

CARD_WIDTH = 1200
CARD_HEIGHT = 630


class GradientStop(AppBaseModel):
    offset: float = Field(..., ge=0, le=1)
    color: str


class Gradient(AppBaseModel):
    """A linear gradient from (x0, y0) to (x1, y1) in card pixels."""

    x0: float
    y0: float
    x1: float
    y1: float
    stops: tuple[GradientStop, ...]


class Palette(AppBaseModel):
    background: Gradient
    box: str
    text: str
    text_dim: str
    profit: str
    loss: str
    border: Optional[str] = None
    accent: Optional[str] = None

    def pnl_color(self, is_profit: bool) -> str:
        return self.profit if is_profit else self.loss


class CardSpec(AppBaseModel):
    width: int = CARD_WIDTH
    height: int = CARD_HEIGHT
    theme: Theme
    palette: Palette


def _vertical(*stops: tuple[float, str]) -> Gradient:
    return Gradient(
        x0=0, y0=0, x1=0, y1=CARD_HEIGHT,
        stops=tuple(GradientStop(offset=o, color=c) for o, c in stops),
    )


def _diagonal(*stops: tuple[float, str]) -> Gradient:
    return Gradient(
        x0=0, y0=0, x1=CARD_WIDTH, y1=CARD_HEIGHT,
        stops=tuple(GradientStop(offset=o, color=c) for o, c in stops),
    )


_PALETTES: dict[Theme, Palette] = {
    Theme.DARK: Palette(
        background=_vertical((0, "#0d0d0d"), (1, "#1a1a2e")),
        box="#252540",
        text="#ffffff",
        text_dim="#888899",
        profit="#00ff88",
        loss="#ff4466",
    ),
    Theme.LIGHT: Palette(
        background=_vertical((0, "#ffffff"), (1, "#f0f0f5")),
        box="#e8e8f0",
        text="#1a1a2e",
        text_dim="#666680",
        profit="#00aa55",
        loss="#dd3355",
        border="#d0d0e0",
    ),
    Theme.DEGEN: Palette(
        background=_diagonal((0, "#0a0015"), (0.5, "#1a0030"), (1, "#0f1a00")),
        box="#2a1050",
        text="#ffffff",
        text_dim="#aa88ff",
        profit="#00ff00",
        loss="#ff0066",
        accent="#ff00ff",
    ),
}


def get_palette(theme: Theme) -> Palette:
    return _PALETTES[Theme(theme)]


def card_spec(theme: Theme) -> CardSpec:
    return CardSpec(theme=Theme(theme), palette=get_palette(theme))
