# src/pnl_cards/core/enums.py

from enum import Enum


class Theme(str, Enum):
    """
    The canonical set of card themes.
    A theme selects a palette and, for DEGEN, an extra decoration pass.
    """

    DARK = "dark"
    LIGHT = "light"
    DEGEN = "degen"

    @classmethod
    def names(cls) -> list[str]:
        return [theme.value for theme in cls]


DEFAULT_THEME = Theme.DARK
