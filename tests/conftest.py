# tests/conftest.py
"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime

import pytest

from pnl_cards.core.enums import Theme
from pnl_cards.core.models import ValidatedRequest
from pnl_cards.pnl.calculator import compute_gain
from pnl_cards.rendering.surface import DrawingSurface


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables between tests."""
    import os

    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 1, 15, 10, 30)


@pytest.fixture
def card_request():
    return ValidatedRequest(
        ticker="TEST",
        entry_price=100,
        current_price=200,
        theme=Theme.DARK,
        wallet_tag="0x1234...abcd",
        timestamp="Jan 15, 2024, 10:30 AM",
    )


@pytest.fixture
def profit_gain():
    return compute_gain(100, 200)


@pytest.fixture
def valid_payload():
    return {
        "ticker": "pepe",
        "entry_price": 0.0000024,
        "current_price": 0.0000120,
        "theme": "degen",
        "wallet_tag": "0x1234...abcd",
        "timestamp": "Jan 15, 2024, 10:30 AM",
    }


class RecordingSurface(DrawingSurface):
    """A DrawingSurface that records every call instead of painting."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.calls: list[tuple] = []

    def fill_gradient(self, gradient):
        self.calls.append(("fill_gradient", gradient))

    def fill_rect(self, x, y, width, height, color, alpha=1.0):
        self.calls.append(("fill_rect", x, y, width, height, color, alpha))

    def stroke_rect(self, x, y, width, height, color, line_width, alpha=1.0):
        self.calls.append(("stroke_rect", x, y, width, height, color, line_width, alpha))

    def fill_rounded_rect(self, x, y, width, height, radius, color, alpha=1.0):
        self.calls.append(("fill_rounded_rect", x, y, width, height, radius, color, alpha))

    def stroke_polyline(self, points, color, line_width, alpha=1.0):
        self.calls.append(("stroke_polyline", tuple(points), color, line_width, alpha))

    def draw_text(self, text, x, y, **style):
        self.calls.append(("draw_text", text, x, y, style))

    def encode_png(self):
        return b"\x89PNG\r\n\x1a\n" + repr(self.calls).encode()

    def named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def texts(self) -> dict[str, dict]:
        return {call[1]: call[4] for call in self.named("draw_text")}


@pytest.fixture
def recording_surfaces():
    """A surface factory that keeps every surface it builds in `.created`."""

    class Factory:
        def __init__(self):
            self.created: list[RecordingSurface] = []

        def __call__(self, width, height):
            surface = RecordingSurface(width, height)
            self.created.append(surface)
            return surface

        @property
        def last(self) -> RecordingSurface:
            return self.created[-1]

    return Factory()
