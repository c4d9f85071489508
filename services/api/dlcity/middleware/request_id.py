from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("dlcity.access")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and write one access log line for it."""

    async def dispatch(self, request, call_next):
        req_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        request.state.request_id = req_id
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-Id"] = req_id
        logger.info(
            "%s %s -> %s (%d ms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            int((time.perf_counter() - started) * 1000),
            req_id,
        )
        return response
