"""
Request timing middleware.
Tags each response with a request id and its processing time and warns on slow requests.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Assigns ``request.state.request_id`` and measures wall-clock processing time.

    Args:
        app: ASGI application
        slow_request_threshold: Seconds above which a request is logged as slow
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.perf_counter() - start_time
            logger.error(
                f"Request error [{request_id}]: {type(exc).__name__} - {exc} "
                f"(processing_time: {processing_time:.3f}s)",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "processing_time": processing_time,
                }
            )
            raise

        processing_time = time.perf_counter() - start_time
        endpoint = f"{request.method} {request.url.path}"

        if processing_time > self.slow_request_threshold:
            log_level = logging.WARNING
            log_message = f"SLOW REQUEST [{request_id}]: {endpoint} - {processing_time:.3f}s"
        else:
            log_level = logging.INFO
            log_message = f"Request [{request_id}]: {endpoint} - {response.status_code} - {processing_time:.3f}s"

        extra_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "processing_time": processing_time,
        }
        if request.method == "GET" and request.query_params:
            extra_data["query_params"] = dict(request.query_params)

        logger.log(log_level, log_message, extra=extra_data)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response
