import os
import json
import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

access_logger = logging.getLogger("transit_api.access")


class LoggingMiddleware(BaseHTTPMiddleware):
    """One JSON access line per request when LOGGING_ENABLED=true."""

    async def dispatch(self, request: Request, call_next):
        if os.getenv("LOGGING_ENABLED", "false").lower() != "true":
            return await call_next(request)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            access_logger.exception("request_failed", extra={"endpoint": request.url.path})
            raise
        elapsed = round((time.perf_counter() - start) * 1000, 2)
        log = {
            "ts": time.time(),
            "ip": request.client.host if request.client else None,
            "method": request.method,
            "endpoint": request.url.path,
            "query": str(request.url.query) or None,
            "status": response.status_code,
            "latency_ms": elapsed,
        }
        access_logger.info(json.dumps(log))
        return response
