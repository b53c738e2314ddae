# src/pnl_cards/api/main.py

"""
Entry point for the card HTTP service.

    python -m pnl_cards.api.main
    PORT=8000 APP_ENV=production pnl-cards
"""

from aiohttp import web
from loguru import logger as log

from ..config.models import ServiceSettings
from ..utils.log_config import configure_logging
from .app import create_app


def main() -> None:
    settings = ServiceSettings.from_env()
    configure_logging(settings.log_level)

    app = create_app(settings)
    log.success(f"Server running on http://{settings.host}:{settings.port} ({settings.environment})")
    web.run_app(app, host=settings.host, port=settings.port, print=None)


if __name__ == "__main__":
    main()
