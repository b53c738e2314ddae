# src/pnl_cards/rendering/matplotlib_surface.py

"""
Agg-backed DrawingSurface.

Each instance owns a private Figure and canvas; pyplot and its global
figure registry are never touched, so surfaces can be used from several
threads at once. Coordinates are card pixels with the origin top-left.
"""

# --- Built Ins  ---
import io
from typing import Iterable, Optional, Sequence

# --- Installed  ---
import numpy as np
from matplotlib import font_manager, patheffects
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_rgb
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import BoxStyle, FancyBboxPatch, Rectangle

# --- Local  ---
from .palette import Gradient
from .surface import DrawingSurface, HorizontalAlign, VerticalAlign

DEFAULT_FONT_FAMILIES = ("Roboto", "DejaVu Sans")
FALLBACK_FONT_FAMILY = "DejaVu Sans"

_DPI = 100
_GLOW_LAYERS = 6
_VERTICAL_ALIGN = {"top": "top", "middle": "center", "bottom": "bottom"}


def resolve_font_families(preferred: Iterable[str]) -> list[str]:
    """Keeps the preferred families matplotlib can actually find, in order."""
    installed = {entry.name for entry in font_manager.fontManager.ttflist}
    families = [family for family in preferred if family in installed]
    return families or [FALLBACK_FONT_FAMILY]


class MatplotlibSurface(DrawingSurface):
    def __init__(self, width: int, height: int, font_families: Sequence[str] = DEFAULT_FONT_FAMILIES):
        self.width = width
        self.height = height
        self._families = resolve_font_families(font_families)

        self._figure = Figure(figsize=(width / _DPI, height / _DPI), dpi=_DPI)
        self._canvas = FigureCanvasAgg(self._figure)
        self._axes = self._figure.add_axes((0, 0, 1, 1))
        self._axes.set_axis_off()
        self._axes.set_xlim(0, width)
        self._axes.set_ylim(height, 0)
        self._axes.set_autoscale_on(False)

        # Painter's order: each call lands above everything drawn before it.
        self._layer = 0

    def _next_layer(self) -> int:
        self._layer += 1
        return self._layer

    @staticmethod
    def _points(pixels: float) -> float:
        return pixels * 72 / _DPI

    # ------------------------------------------------------------------
    # DrawingSurface interface
    # ------------------------------------------------------------------

    def fill_gradient(self, gradient: Gradient) -> None:
        dx = gradient.x1 - gradient.x0
        dy = gradient.y1 - gradient.y0
        length_sq = (dx * dx + dy * dy) or 1.0

        xs = np.arange(self.width, dtype=float) + 0.5
        ys = np.arange(self.height, dtype=float) + 0.5
        t = ((xs[np.newaxis, :] - gradient.x0) * dx + (ys[:, np.newaxis] - gradient.y0) * dy) / length_sq
        t = np.clip(t, 0.0, 1.0)

        offsets = [stop.offset for stop in gradient.stops]
        colors = np.array([to_rgb(stop.color) for stop in gradient.stops])
        image = np.stack([np.interp(t, offsets, colors[:, channel]) for channel in range(3)], axis=-1)

        self._axes.imshow(
            image,
            extent=(0, self.width, self.height, 0),
            interpolation="nearest",
            resample=False,
            aspect="auto",
            zorder=self._next_layer(),
        )

    def fill_rect(self, x, y, width, height, color, alpha=1.0) -> None:
        self._axes.add_patch(
            Rectangle(
                (x, y), width, height,
                facecolor=color, edgecolor="none", linewidth=0, alpha=alpha,
                zorder=self._next_layer(),
            )
        )

    def stroke_rect(self, x, y, width, height, color, line_width, alpha=1.0) -> None:
        self._axes.add_patch(
            Rectangle(
                (x, y), width, height,
                fill=False, edgecolor=color, linewidth=self._points(line_width), alpha=alpha,
                zorder=self._next_layer(),
            )
        )

    def fill_rounded_rect(self, x, y, width, height, radius, color, alpha=1.0) -> None:
        self._axes.add_patch(
            FancyBboxPatch(
                (x, y), width, height,
                boxstyle=BoxStyle.Round(pad=0, rounding_size=radius),
                facecolor=color, edgecolor="none", linewidth=0, alpha=alpha,
                zorder=self._next_layer(),
            )
        )

    def stroke_polyline(self, points, color, line_width, alpha=1.0) -> None:
        xs = [point[0] for point in points]
        ys = [point[1] for point in points]
        self._axes.add_line(
            Line2D(
                xs, ys,
                color=color, linewidth=self._points(line_width), alpha=alpha,
                solid_joinstyle="miter", solid_capstyle="butt",
                zorder=self._next_layer(),
            )
        )

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        color: str,
        size: float,
        bold: bool = True,
        align: HorizontalAlign = "left",
        baseline: VerticalAlign = "top",
        alpha: float = 1.0,
        glow: Optional[float] = None,
    ) -> None:
        effects = []
        if glow:
            # Concentric strokes fading outward approximate a blurred halo.
            for step in range(_GLOW_LAYERS, 0, -1):
                effects.append(
                    patheffects.Stroke(
                        linewidth=self._points(glow * step / _GLOW_LAYERS),
                        foreground=color,
                        alpha=alpha / (_GLOW_LAYERS + 2),
                    )
                )
            effects.append(patheffects.Normal())

        self._axes.text(
            x, y, text,
            color=color,
            alpha=alpha,
            fontsize=self._points(size),
            fontweight="bold" if bold else "normal",
            fontfamily=self._families,
            ha=align,
            va=_VERTICAL_ALIGN[baseline],
            parse_math=False,
            path_effects=effects,
            zorder=self._next_layer(),
        )

    def encode_png(self) -> bytes:
        buffer = io.BytesIO()
        try:
            # PNG without a "Software" text chunk.
            self._canvas.print_png(buffer, metadata={"Software": None})
        finally:
            self._figure.clear()
        return buffer.getvalue()
