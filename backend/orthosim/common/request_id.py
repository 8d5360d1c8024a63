"""Request ID middleware and utilities."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from orthosim.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> str:
    """Get request ID from request state."""
    return getattr(request.state, "request_id", "unknown")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log its outcome and latency."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        log_fields = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Request failed",
                extra={**log_fields, "status_code": 500, "latency_ms": _elapsed_ms(start)},
                exc_info=True,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            extra={
                **log_fields,
                "status_code": response.status_code,
                "latency_ms": _elapsed_ms(start),
            },
        )
        return response


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
