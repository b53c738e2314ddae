# src/pnl_cards/api/middlewares.py

# --- Built Ins  ---
import time

# --- Installed  ---
from aiohttp import web
from loguru import logger as log

# --- Local  ---
from ..core.exceptions import RenderError
from .keys import METRICS_KEY
from .responses import error_response


@web.middleware
async def metrics_middleware(request: web.Request, handler) -> web.StreamResponse:
    metrics = request.app[METRICS_KEY]
    metrics.record_request()
    start = time.perf_counter()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as e:
        status = e.status
        raise
    finally:
        metrics.record_response(status, (time.perf_counter() - start) * 1000)


@web.middleware
async def access_log_middleware(request: web.Request, handler) -> web.StreamResponse:
    start = time.perf_counter()
    response = await handler(request)
    log.trace(f"{request.method} {request.path} {response.status} {(time.perf_counter() - start) * 1000:.0f}ms")
    return response


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except web.HTTPNotFound:
        return error_response(f"{request.method} {request.path} not found", status=404)
    except web.HTTPException:
        raise
    except RenderError as e:
        log.error(f"{request.method} {request.path}: {e}")
        return error_response("Render failed", status=500)
    except Exception:
        log.exception(f"{request.method} {request.path}")
        return error_response("Server error", status=500)
