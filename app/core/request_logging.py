# app/core/request_logging.py
"""
Request logging middleware for tracking all HTTP requests.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

#: Sökvägar som bara loggas på DEBUG-nivå.
QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every HTTP request with timing and status code.

    Reuses an incoming X-Request-ID or generates one, and echoes it
    back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        error = None
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error = str(e)
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            _log_request(request, request_id, status_code, duration_ms, error)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _log_request(
    request: Request,
    request_id: str,
    status_code: int,
    duration_ms: float,
    error: str | None,
) -> None:
    extra = {
        "extra_fields": {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }
    }
    message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"

    if error:
        logger.error(f"{message} - ERROR: {error}", extra=extra, exc_info=True)
    elif status_code >= 500:
        logger.error(message, extra=extra)
    elif status_code >= 400:
        logger.warning(message, extra=extra)
    elif request.url.path in QUIET_PATHS:
        logger.debug(message, extra=extra)
    else:
        logger.info(message, extra=extra)
