# src/pnl_cards/api/app.py

# --- Built Ins  ---
from typing import Optional

# --- Installed  ---
from aiohttp import web
from loguru import logger as log

# --- Local  ---
from ..config.models import ServiceSettings
from ..rendering.fonts import FontStatus, load_fonts
from ..services.card_service import CardService
from .keys import FONT_STATUS_KEY, METRICS_KEY, SERVICE_KEY, SETTINGS_KEY
from .metrics import RequestMetrics
from .middlewares import access_log_middleware, error_middleware, metrics_middleware
from .routes import card_routes, debug_routes, ops_routes


def create_app(
    settings: Optional[ServiceSettings] = None,
    service: Optional[CardService] = None,
    font_status: Optional[FontStatus] = None,
) -> web.Application:
    """
    Builds the HTTP application. Fonts are loaded here unless a status is
    supplied, so tests can inject both the service and the font outcome.
    """
    settings = settings or ServiceSettings()
    if font_status is None:
        font_status = load_fonts(settings.fonts_dir, settings.font_family)
    if not font_status.success:
        log.warning(f"[Fonts] {font_status.family} unavailable, rendering with fallback fonts")

    app = web.Application(
        client_max_size=settings.max_body_bytes,
        middlewares=[metrics_middleware, access_log_middleware, error_middleware],
    )
    app[SETTINGS_KEY] = settings
    app[SERVICE_KEY] = service or CardService()
    app[FONT_STATUS_KEY] = font_status
    app[METRICS_KEY] = RequestMetrics()

    app.add_routes(ops_routes)
    app.add_routes(card_routes)
    if settings.enable_debug_routes:
        app.add_routes(debug_routes)
    return app
