# src/pnl_cards/api/keys.py

from aiohttp import web

from ..config.models import ServiceSettings
from ..rendering.fonts import FontStatus
from ..services.card_service import CardService
from .metrics import RequestMetrics

SETTINGS_KEY = web.AppKey("settings", ServiceSettings)
SERVICE_KEY = web.AppKey("card_service", CardService)
FONT_STATUS_KEY = web.AppKey("font_status", FontStatus)
METRICS_KEY = web.AppKey("metrics", RequestMetrics)
