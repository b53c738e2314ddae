# src/pnl_cards/rendering/surface.py

from abc import ABC, abstractmethod
from typing import Callable, Literal, Optional, Sequence

from .palette import Gradient

HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "middle", "bottom"]


class DrawingSurface(ABC):
    """
    The contract for a fixed-size 2-D raster canvas.

    Every operation takes its full styling explicitly; implementations must
    not carry fill colour, alpha, font or transform from one call to the
    next. Operations are painted in call order.
    """

    width: int
    height: int

    @abstractmethod
    def fill_gradient(self, gradient: Gradient) -> None:
        """Paints the whole surface with a linear gradient."""
        raise NotImplementedError

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: str, alpha: float = 1.0) -> None:
        raise NotImplementedError

    @abstractmethod
    def stroke_rect(
        self, x: float, y: float, width: float, height: float, color: str, line_width: float, alpha: float = 1.0
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def fill_rounded_rect(
        self, x: float, y: float, width: float, height: float, radius: float, color: str, alpha: float = 1.0
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def stroke_polyline(
        self, points: Sequence[tuple[float, float]], color: str, line_width: float, alpha: float = 1.0
    ) -> None:
        raise NotImplementedError

    @abstractmethod
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
        """
        Draws a single line of text anchored at (x, y).

        `size` is the font size in pixels. `glow` is an optional blur
        radius in pixels for a halo in the text colour behind the glyphs.
        """
        raise NotImplementedError

    @abstractmethod
    def encode_png(self) -> bytes:
        """Encodes the surface as PNG and releases its resources."""
        raise NotImplementedError


SurfaceFactory = Callable[[int, int], DrawingSurface]
