# tests/pnl_cards/rendering/test_composer.py

import struct
from concurrent.futures import ThreadPoolExecutor

import pytest

from pnl_cards.core.enums import Theme
from pnl_cards.core.exceptions import RenderError
from pnl_cards.pnl.calculator import compute_gain
from pnl_cards.rendering.composer import CORNER_SIZE, compose_card
from pnl_cards.rendering.palette import get_palette

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _png_size(image: bytes) -> tuple[int, int]:
    return struct.unpack(">II", image[16:24])


class TestComposeCardDrawing:
    """Tests for what compose_card draws, using a recording surface."""

    def _compose(self, recording_surfaces, request, gain, theme=None):
        compose_card(request, gain, theme=theme, surface_factory=recording_surfaces)
        return recording_surfaces.last

    def test_surface_is_card_sized(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain)
        assert (surface.width, surface.height) == (1200, 630)

    def test_background_is_painted_first(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain)
        assert surface.calls[0] == ("fill_gradient", get_palette(Theme.DARK).background)

    def test_header_and_figures(self, recording_surfaces, card_request, profit_gain):
        texts = self._compose(recording_surfaces, card_request, profit_gain).texts()
        assert texts["$TEST"]["size"] == 72
        assert "P&L CARD" in texts
        assert texts["+100.0%"]["size"] == 140
        assert texts["+100.0%"]["align"] == "center"
        assert "$100.00" in texts
        assert "$200.00" in texts
        assert {"ENTRY", "CURRENT", "→", "FLEX CARD"} <= set(texts)

    def test_footer_text(self, recording_surfaces, card_request, profit_gain):
        texts = self._compose(recording_surfaces, card_request, profit_gain).texts()
        assert texts["0x1234...abcd"]["baseline"] == "bottom"
        assert texts["Jan 15, 2024, 10:30 AM"]["bold"] is False
        assert texts["FLEX CARD"]["alpha"] == 0.6

    def test_footer_text_is_optional(self, recording_surfaces, card_request, profit_gain):
        request = card_request.model_copy(update={"wallet_tag": None, "timestamp": ""})
        texts = self._compose(recording_surfaces, request, profit_gain).texts()
        assert "0x1234...abcd" not in texts
        assert "" not in texts
        assert "FLEX CARD" in texts

    def test_gain_and_current_price_use_pnl_color(self, recording_surfaces, card_request, profit_gain):
        palette = get_palette(Theme.DARK)
        texts = self._compose(recording_surfaces, card_request, profit_gain).texts()
        assert texts["+100.0%"]["color"] == palette.profit
        assert texts["$200.00"]["color"] == palette.profit
        assert texts["$100.00"]["color"] == palette.text

    def test_loss_colors(self, recording_surfaces, card_request):
        request = card_request.model_copy(update={"current_price": 50.0})
        texts = self._compose(recording_surfaces, request, compute_gain(100, 50)).texts()
        loss = get_palette(Theme.DARK).loss
        assert texts["-50.0%"]["color"] == loss
        assert texts["$50.00"]["color"] == loss

    def test_two_price_boxes(self, recording_surfaces, card_request, profit_gain):
        boxes = self._compose(recording_surfaces, card_request, profit_gain).named("fill_rounded_rect")
        assert [(b[1], b[2], b[3], b[4], b[5]) for b in boxes] == [(100, 380, 480, 100, 16), (620, 380, 480, 100, 16)]

    def test_dark_has_no_decorations(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain)
        assert surface.named("fill_rect") == []
        assert surface.named("stroke_polyline") == []
        assert surface.named("stroke_rect") == []
        assert surface.texts()["+100.0%"]["glow"] is None

    def test_light_draws_border(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain, theme=Theme.LIGHT)
        assert surface.named("stroke_rect") == [("stroke_rect", 1, 1, 1198, 628, "#d0d0e0", 2, 1.0)]

    def test_degen_scanlines_corners_and_glow(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain, theme=Theme.DEGEN)
        scanlines = surface.named("fill_rect")
        assert len(scanlines) == 158
        assert scanlines[0][1:5] == (0, 0, 1200, 1)
        assert scanlines[-1][2] == 628
        assert all(line[6] == 0.03 for line in scanlines)

        corners = surface.named("stroke_polyline")
        assert len(corners) == 4
        assert corners[0][1] == ((0, CORNER_SIZE), (0, 0), (CORNER_SIZE, 0))
        assert all(corner[2] == "#ff00ff" for corner in corners)

        assert surface.texts()["+100.0%"]["glow"] == 30

    def test_decorations_sit_below_text(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain, theme=Theme.DEGEN)
        kinds = [call[0] for call in surface.calls]
        assert max(i for i, k in enumerate(kinds) if k == "stroke_polyline") < kinds.index("draw_text")

    def test_theme_override(self, recording_surfaces, card_request, profit_gain):
        surface = self._compose(recording_surfaces, card_request, profit_gain, theme=Theme.LIGHT)
        assert surface.calls[0][1] == get_palette(Theme.LIGHT).background

    def test_ticker_is_upper_cased_with_dollar(self, recording_surfaces, card_request, profit_gain):
        request = card_request.model_copy(update={"ticker": "$WIF"})
        assert "$$WIF" in self._compose(recording_surfaces, request, profit_gain).texts()

    def test_backend_failure_becomes_render_error(self, card_request, profit_gain):
        def broken_factory(width, height):
            raise RuntimeError("no canvas")

        with pytest.raises(RenderError) as exc_info:
            compose_card(card_request, profit_gain, surface_factory=broken_factory)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "TEST" in str(exc_info.value)


class TestComposeCardPng:
    """Tests for compose_card with the real Agg backend."""

    def test_png_signature_and_size(self, card_request, profit_gain):
        image = compose_card(card_request, profit_gain)
        assert image.startswith(PNG_SIGNATURE)
        assert _png_size(image) == (1200, 630)

    def test_deterministic(self, card_request, profit_gain):
        assert compose_card(card_request, profit_gain) == compose_card(card_request, profit_gain)

    def test_themes_differ(self, card_request, profit_gain):
        images = {theme: compose_card(card_request, profit_gain, theme=theme) for theme in Theme}
        assert len(set(images.values())) == 3

    def test_ticker_changes_output(self, card_request, profit_gain):
        other = card_request.model_copy(update={"ticker": "OTHER"})
        assert compose_card(card_request, profit_gain) != compose_card(other, profit_gain)

    def test_profit_and_loss_differ(self, card_request, profit_gain):
        loss_request = card_request.model_copy(update={"current_price": 50.0})
        assert compose_card(card_request, profit_gain) != compose_card(loss_request, compute_gain(100, 50))

    @pytest.mark.parametrize("theme", list(Theme))
    def test_every_theme_renders(self, card_request, profit_gain, theme):
        assert _png_size(compose_card(card_request, profit_gain, theme=theme)) == (1200, 630)

    def test_parallel_renders_match_serial_render(self, card_request, profit_gain):
        expected = compose_card(card_request, profit_gain)
        with ThreadPoolExecutor(max_workers=4) as pool:
            images = list(pool.map(lambda _: compose_card(card_request, profit_gain), range(4)))
        assert all(image == expected for image in images)
