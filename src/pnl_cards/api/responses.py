# src/pnl_cards/api/responses.py

from typing import Any

import orjson
from aiohttp import web


def _dumps(obj: Any) -> str:
    return orjson.dumps(obj).decode()


def json_response(data: Any, status: int = 200) -> web.Response:
    return web.json_response(data, status=status, dumps=_dumps)


def error_response(error: str, status: int, **extra: Any) -> web.Response:
    return json_response({"success": False, "error": error, **extra}, status=status)


def png_response(image: bytes) -> web.Response:
    return web.Response(body=image, content_type="image/png")
