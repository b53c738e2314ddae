# tests/pnl_cards/core/test_models.py

import base64

import pytest
from pydantic import ValidationError

from pnl_cards.core.enums import DEFAULT_THEME, Theme
from pnl_cards.core.exceptions import RequestValidationError
from pnl_cards.core.models import (
    CardMetadata,
    CardResult,
    FieldError,
    ValidatedRequest,
    ValidationFailure,
)


class TestTheme:
    """Tests for the Theme enum."""

    def test_names(self):
        assert Theme.names() == ["dark", "light", "degen"]

    def test_default(self):
        assert DEFAULT_THEME is Theme.DARK

    def test_is_a_string(self):
        assert Theme.DEGEN == "degen"


class TestValidatedRequest:
    """Tests for the ValidatedRequest constraints."""

    def test_frozen(self, card_request):
        with pytest.raises(ValidationError):
            card_request.ticker = "OTHER"

    @pytest.mark.parametrize(
        "override",
        [
            {"ticker": "pepe"},
            {"ticker": ""},
            {"ticker": "A" * 21},
            {"entry_price": 0},
            {"entry_price": 1e-21},
            {"current_price": -1},
            {"current_price": 2e15},
            {"wallet_tag": "x" * 51},
        ],
    )
    def test_rejects_out_of_contract_values(self, override):
        fields = {"ticker": "PEPE", "entry_price": 1, "current_price": 1, **override}
        with pytest.raises(ValidationError):
            ValidatedRequest(**fields)


class TestValidationFailure:
    """Tests for ValidationFailure."""

    def test_messages_and_field_names(self):
        failure = ValidationFailure(
            errors=[
                FieldError(field="ticker", message="ticker is required"),
                FieldError(field="theme", message="theme must be: dark, light, degen"),
            ]
        )
        assert failure.messages == ["ticker is required", "theme must be: dark, light, degen"]
        assert failure.field_names == ["ticker", "theme"]

    def test_requires_at_least_one_error(self):
        with pytest.raises(ValidationError):
            ValidationFailure(errors=[])

    def test_wrapped_in_exception(self):
        failure = ValidationFailure(errors=[FieldError(field="ticker", message="ticker is required")])
        error = RequestValidationError(failure)
        assert error.failure is failure
        assert "ticker is required" in str(error)


class TestCardResult:
    """Tests for CardResult."""

    def test_data_uri(self):
        result = CardResult(
            image=b"\x89PNG",
            metadata=CardMetadata(
                ticker="PEPE", gain_percentage=400, formatted_gain="+400.0%", is_profit=True, theme=Theme.DEGEN
            ),
        )
        prefix = "data:image/png;base64,"
        uri = result.data_uri()
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix):]) == b"\x89PNG"

    def test_metadata_serializes_theme_value(self):
        metadata = CardMetadata(
            ticker="PEPE", gain_percentage=400, formatted_gain="+400.0%", is_profit=True, theme=Theme.DEGEN
        )
        assert metadata.model_dump(mode="json")["theme"] == "degen"
