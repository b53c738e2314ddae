# src/pnl_cards/rendering/fonts.py

# --- Built Ins  ---
from pathlib import Path
from typing import Optional

# --- Installed  ---
from loguru import logger as log
from matplotlib import font_manager
from pydantic import Field

# --- Local  ---
from ..core.models import AppBaseModel

FONT_FILES = {"Roboto": ("Roboto-Bold.ttf",)}


class FontStatus(AppBaseModel):
    success: bool
    family: str
    fonts_dir: Optional[str] = None
    loaded: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


def candidate_font_dirs(fonts_dir: Optional[str] = None) -> list[Path]:
    package_assets = Path(__file__).resolve().parent.parent / "assets" / "fonts"
    candidates = [Path(fonts_dir)] if fonts_dir else []
    candidates += [package_assets, Path.cwd() / "assets" / "fonts", Path.cwd() / "src" / "pnl_cards" / "assets" / "fonts"]
    return candidates


def find_fonts_dir(fonts_dir: Optional[str] = None) -> Path:
    candidates = candidate_font_dirs(fonts_dir)
    return next((path for path in candidates if path.is_dir()), candidates[0])


def load_fonts(fonts_dir: Optional[str] = None, family: str = "Roboto") -> FontStatus:
    """
    Registers the bold weight of `family` with matplotlib's font manager.

    A failure here is not fatal: cards still render with the bundled
    fallback family. The returned status feeds the health endpoint.
    """
    directory = find_fonts_dir(fonts_dir)
    log.info(f"[Fonts] Loading from: {directory}")

    if not directory.is_dir():
        log.error(f"[Fonts] Directory not found: {directory}")
        return FontStatus(success=False, family=family, fonts_dir=str(directory))

    loaded: list[str] = []
    failed: list[str] = []
    for file_name in FONT_FILES.get(family, (f"{family}-Bold.ttf",)):
        font_path = directory / file_name
        if not font_path.is_file():
            log.error(f"[Fonts] {file_name} not found")
            failed.append(file_name)
            continue
        try:
            font_manager.fontManager.addfont(str(font_path))
        except (OSError, RuntimeError, ValueError) as e:
            log.error(f"[Fonts] {file_name}: {e}")
            failed.append(file_name)
            continue
        log.success(f"[Fonts] {family} (bold) registered")
        loaded.append(file_name)

    return FontStatus(
        success=not failed,
        family=family,
        fonts_dir=str(directory),
        loaded=loaded,
        failed=failed,
    )
