from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware


class AllowAnyOriginMiddleware(BaseHTTPMiddleware):
    """Send ``Access-Control-Allow-Origin: *`` on every response.

    CORSMiddleware only answers requests that carry an Origin header; this
    covers the rest when the wildcard origin is configured.
    """

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response
