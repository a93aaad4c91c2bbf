"""CORS for the browser clients.

Known origins and preview deployments get their own origin echoed back.
Anything else gets the first allow-listed origin, so browsers refuse to
hand the response to the calling page.
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

import config

logger = logging.getLogger(__name__)

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOW_METHODS = "GET, POST, OPTIONS"


def is_allowed_origin(
    origin: str,
    allowed: tuple[str, ...] = config.ALLOWED_ORIGINS,
    suffixes: tuple[str, ...] = config.ALLOWED_ORIGIN_SUFFIXES,
) -> bool:
    return origin in allowed or (bool(origin) and origin.endswith(suffixes))


def cors_headers(
    origin: str,
    allowed: tuple[str, ...] = config.ALLOWED_ORIGINS,
    suffixes: tuple[str, ...] = config.ALLOWED_ORIGIN_SUFFIXES,
) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin if is_allowed_origin(origin, allowed, suffixes) else allowed[0],
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Credentials": "true",
        "Vary": "Origin",
    }


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """Answers preflights and adds CORS headers to every response."""

    def __init__(self, app, allowed_origins: tuple[str, ...] = config.ALLOWED_ORIGINS,
                 allowed_suffixes: tuple[str, ...] = config.ALLOWED_ORIGIN_SUFFIXES):
        super().__init__(app)
        self.allowed_origins = tuple(allowed_origins)
        self.allowed_suffixes = tuple(allowed_suffixes)

    async def dispatch(self, request: Request, call_next) -> Response:
        headers = cors_headers(request.headers.get("Origin", ""), self.allowed_origins, self.allowed_suffixes)

        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors still leave with CORS headers
            logger.exception(f"Unexpected error on {request.method} {request.url.path}")
            response = JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})
        response.headers.update(headers)
        return response
