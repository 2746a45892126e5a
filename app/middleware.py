# app/middleware.py
import logging
import time

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs every request with its status and duration
    """
    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            f"{client} {request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f} ms)"
        )
        return response


def setup_middleware(app: FastAPI):
    """Add all middleware to the application"""
    app.add_middleware(RequestLoggingMiddleware)
