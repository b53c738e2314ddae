# src/pnl_cards/rendering/composer.py

# --- Built Ins  ---
from typing import Optional

# --- Local  ---
from ..core.enums import Theme
from ..core.exceptions import RenderError
from ..core.models import FormattedFigures, GainResult, ValidatedRequest
from ..utils.formatter import format_figures
from .matplotlib_surface import MatplotlibSurface
from .palette import CARD_HEIGHT, CARD_WIDTH, CardSpec, Palette, card_spec
from .surface import DrawingSurface, SurfaceFactory

PADDING = 60
CENTER_X = CARD_WIDTH // 2

HEADER_LABEL = "P&L CARD"
WATERMARK = "FLEX CARD"

GAIN_Y = 270
GAIN_GLOW = 30

BOX_WIDTH = 480
BOX_HEIGHT = 100
BOX_Y = 380
BOX_GAP = 40
BOX_RADIUS = 16

FOOTER_Y = CARD_HEIGHT - PADDING - 10

SCANLINE_STEP = 4
CORNER_SIZE = 100


def _draw_degen_effects(surface: DrawingSurface, palette: Palette) -> None:
    for y in range(0, CARD_HEIGHT, SCANLINE_STEP):
        surface.fill_rect(0, y, CARD_WIDTH, 1, "#ffffff", alpha=0.03)

    s = CORNER_SIZE
    corners = (
        ((0, s), (0, 0), (s, 0)),
        ((CARD_WIDTH - s, 0), (CARD_WIDTH, 0), (CARD_WIDTH, s)),
        ((0, CARD_HEIGHT - s), (0, CARD_HEIGHT), (s, CARD_HEIGHT)),
        ((CARD_WIDTH - s, CARD_HEIGHT), (CARD_WIDTH, CARD_HEIGHT), (CARD_WIDTH, CARD_HEIGHT - s)),
    )
    for corner in corners:
        surface.stroke_polyline(corner, palette.accent or "#ff00ff", line_width=3, alpha=0.5)


def _draw_price_box(
    surface: DrawingSurface, palette: Palette, x: float, label: str, value: str, value_color: str
) -> None:
    center = x + BOX_WIDTH / 2
    surface.fill_rounded_rect(x, BOX_Y, BOX_WIDTH, BOX_HEIGHT, BOX_RADIUS, palette.box)
    surface.draw_text(label, center, BOX_Y + 15, color=palette.text_dim, size=24, align="center")
    surface.draw_text(value, center, BOX_Y + 50, color=value_color, size=36, align="center")


def draw_card(
    surface: DrawingSurface,
    spec: CardSpec,
    request: ValidatedRequest,
    gain: GainResult,
    figures: FormattedFigures,
) -> None:
    """Paints the full card layout onto `surface`; geometry is the same for every theme."""
    palette = spec.palette
    pnl_color = palette.pnl_color(gain.is_profit)

    surface.fill_gradient(palette.background)
    if spec.theme is Theme.DEGEN:
        _draw_degen_effects(surface, palette)
    if palette.border:
        surface.stroke_rect(1, 1, CARD_WIDTH - 2, CARD_HEIGHT - 2, palette.border, line_width=2)

    # Header
    surface.draw_text(f"${request.ticker.upper()}", PADDING, PADDING, color=palette.text, size=72)
    surface.draw_text(
        HEADER_LABEL, CARD_WIDTH - PADDING, PADDING + 10, color=palette.text_dim, size=28, align="right"
    )

    # Centerpiece
    surface.draw_text(
        figures.gain_text,
        CENTER_X,
        GAIN_Y,
        color=pnl_color,
        size=140,
        align="center",
        baseline="middle",
        glow=GAIN_GLOW if spec.theme is Theme.DEGEN else None,
    )

    # Price boxes
    entry_x = CENTER_X - BOX_WIDTH - BOX_GAP / 2
    current_x = CENTER_X + BOX_GAP / 2
    _draw_price_box(surface, palette, entry_x, "ENTRY", figures.entry_price_text, palette.text)
    _draw_price_box(surface, palette, current_x, "CURRENT", figures.current_price_text, pnl_color)
    surface.draw_text(
        "→", CENTER_X, BOX_Y + BOX_HEIGHT / 2, color=palette.text_dim, size=40, align="center", baseline="middle"
    )

    # Footer
    if request.wallet_tag:
        surface.draw_text(request.wallet_tag, PADDING, FOOTER_Y, color=palette.text_dim, size=24, baseline="bottom")
    if request.timestamp:
        surface.draw_text(
            request.timestamp,
            CENTER_X,
            FOOTER_Y,
            color=palette.text_dim,
            size=22,
            bold=False,
            align="center",
            baseline="bottom",
        )
    surface.draw_text(
        WATERMARK,
        CARD_WIDTH - PADDING,
        FOOTER_Y,
        color=palette.text_dim,
        size=20,
        align="right",
        baseline="bottom",
        alpha=0.6,
    )


def compose_card(
    request: ValidatedRequest,
    gain: GainResult,
    figures: Optional[FormattedFigures] = None,
    theme: Optional[Theme] = None,
    surface_factory: SurfaceFactory = MatplotlibSurface,
) -> bytes:
    """
    Renders a 1200x630 PNG card.

    Output is a pure function of the arguments: the same inputs produce the
    same bytes for a given drawing backend and font set. `theme` overrides
    the request's theme; `figures` default to the standard formatters.

    Raises:
        RenderError: the drawing backend failed.
    """
    spec = card_spec(theme or request.theme)
    if figures is None:
        figures = format_figures(gain.percentage, request.entry_price, request.current_price)

    try:
        surface = surface_factory(spec.width, spec.height)
        draw_card(surface, spec, request, gain, figures)
        return surface.encode_png()
    except RenderError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to render card for {request.ticker}: {e}") from e
