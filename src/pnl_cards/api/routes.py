# src/pnl_cards/api/routes.py

# --- Built Ins  ---
import asyncio
import base64
import time

# --- Installed  ---
import orjson
from aiohttp import web
from loguru import logger as log

# --- Local  ---
from ..core.enums import DEFAULT_THEME, Theme
from ..core.exceptions import DomainError, RenderError, RequestValidationError
from ..rendering.matplotlib_surface import MatplotlibSurface
from ..services.card_service import sample_calculations, sample_request
from .keys import FONT_STATUS_KEY, METRICS_KEY, SERVICE_KEY
from .responses import error_response, json_response, png_response

API_PREFIX = "/api/v1"
PRICE_PER_CALL = "$0.02"

card_routes = web.RouteTableDef()
debug_routes = web.RouteTableDef()
ops_routes = web.RouteTableDef()


# --- Operational ---


@ops_routes.get("/health")
async def health(request: web.Request) -> web.Response:
    fonts = request.app[FONT_STATUS_KEY]
    metrics = request.app[METRICS_KEY]
    return json_response(
        {
            "status": "healthy" if fonts.success else "degraded",
            "uptime": metrics.uptime_seconds(),
            "fonts": {"loaded": len(fonts.loaded), "failed": len(fonts.failed)},
        },
        status=200 if fonts.success else 503,
    )


@ops_routes.get("/metrics")
async def metrics(request: web.Request) -> web.Response:
    return json_response(request.app[METRICS_KEY].snapshot())


# --- Cards ---


@card_routes.get(f"{API_PREFIX}/generate-card")
async def describe_generate_card(request: web.Request) -> web.Response:
    return json_response(
        {
            "endpoint": f"{API_PREFIX}/generate-card",
            "method": "POST",
            "description": "Generate P&L flex card image",
            "parameters": {
                "ticker": {"type": "string", "required": True},
                "entry_price": {"type": "number", "required": True},
                "current_price": {"type": "number", "required": True},
                "theme": {
                    "type": "string",
                    "required": False,
                    "default": DEFAULT_THEME.value,
                    "options": Theme.names(),
                },
                "wallet_tag": {"type": "string", "required": False},
                "timestamp": {"type": "string", "required": False},
            },
            "apix402": {"price": PRICE_PER_CALL, "category": "image-generation"},
        }
    )


@card_routes.post(f"{API_PREFIX}/generate-card")
async def generate_card(request: web.Request) -> web.Response:
    raw_body = await request.read()
    try:
        body = orjson.loads(raw_body) if raw_body.strip() else {}
    except orjson.JSONDecodeError:
        return error_response("Invalid JSON", status=400)

    service = request.app[SERVICE_KEY]
    try:
        result = await asyncio.to_thread(service.generate, body)
    except RequestValidationError as e:
        return error_response("Validation failed", status=400, details=e.failure.messages)
    except DomainError as e:
        return error_response(str(e), status=400)
    except RenderError:
        return error_response("Render failed", status=500)
    except Exception:
        log.exception("generate-card failed")
        return error_response("Failed to generate card", status=500)

    return json_response(
        {
            "success": True,
            "image": result.data_uri(),
            "metadata": result.metadata.model_dump(mode="json"),
        }
    )


# --- Debug ---


def _render_probe() -> bytes:
    surface = MatplotlibSurface(400, 200)
    surface.fill_rect(0, 0, 400, 200, "#1a1a2e")
    surface.draw_text("Canvas OK", 200, 100, color="#00ff88", size=32, align="center", baseline="middle")
    return surface.encode_png()


@debug_routes.get("/debug/canvas-test")
async def canvas_test(request: web.Request) -> web.Response:
    try:
        image = await asyncio.to_thread(_render_probe)
    except Exception as e:
        log.exception("canvas-test failed")
        return error_response(str(e), status=500)
    if request.query.get("format") == "image":
        return png_response(image)
    return json_response({"success": True, "image": "data:image/png;base64," + base64.b64encode(image).decode()})


@debug_routes.get("/debug/pnl-test")
async def pnl_test(request: web.Request) -> web.Response:
    return json_response({"tests": sample_calculations()})


async def _render_theme(request: web.Request, theme: Theme) -> web.Response:
    service = request.app[SERVICE_KEY]
    profit = request.query.get("loss") != "true"
    raw = sample_request(profit, theme.value, service.default_timestamp())
    start = time.perf_counter()
    try:
        result = await asyncio.to_thread(service.generate, raw)
    except Exception as e:
        log.exception(f"render-{theme.value} failed")
        return error_response(str(e), status=500)
    log.debug(f"render-{theme.value} took {(time.perf_counter() - start) * 1000:.0f}ms")
    if request.query.get("format") == "json":
        return json_response({"theme": theme.value, "image": result.data_uri()})
    return png_response(result.image)


@debug_routes.get("/debug/render-dark")
async def render_dark(request: web.Request) -> web.Response:
    return await _render_theme(request, Theme.DARK)


@debug_routes.get("/debug/render-light")
async def render_light(request: web.Request) -> web.Response:
    return await _render_theme(request, Theme.LIGHT)


@debug_routes.get("/debug/render-degen")
async def render_degen(request: web.Request) -> web.Response:
    return await _render_theme(request, Theme.DEGEN)
