"""
PromptIDE - HTTP Middleware
Request logging, request ids and body size limits
"""

import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from promptide.core.config import settings
from promptide.core.logging_config import (
    logger,
    set_request_id,
    generate_request_id,
)

MAX_LOG_LINE = 80


def format_log_line(method: str, path: str, status_code: int, duration_ms: int,
                    body: Optional[str] = None) -> str:
    """`METHOD path status in Nms :: body`, cut to MAX_LOG_LINE characters"""
    line = f"{method} {path} {status_code} in {duration_ms}ms"
    if body:
        line += f" :: {body}"
    if len(line) > MAX_LOG_LINE:
        line = line[:MAX_LOG_LINE - 1] + "…"
    return line


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per API request with the JSON body that was sent back.

    Only paths under the API prefix are logged; the captured body is
    replayed into a fresh response.
    """

    def __init__(self, app: ASGIApp, prefix: Optional[str] = None):
        super().__init__(app)
        self.prefix = prefix if prefix is not None else settings.API_PREFIX

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        path = request.url.path
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id

            if not path.startswith(self.prefix):
                return response

            body_text = None
            if response.headers.get("content-type", "").startswith("application/json"):
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk
                body_text = body.decode("utf-8", errors="replace")
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )

            duration_ms = int((time.perf_counter() - start_time) * 1000)
            status_code = response.status_code
            log_func = logger.error if status_code >= 500 else logger.warning if status_code >= 400 else logger.info
            log_func(
                format_log_line(request.method, path, status_code, duration_ms, body_text),
                extra={
                    "event_type": "http_request",
                    "http_method": request.method,
                    "http_path": path,
                    "http_status": status_code,
                    "duration_ms": duration_ms,
                }
            )
            return response

        except Exception as exc:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(
                f"✗ {request.method} {path} - Exception ({duration_ms}ms): {type(exc).__name__}",
                exc_info=True,
                extra={
                    "event_type": "http_request_error",
                    "http_method": request.method,
                    "http_path": path,
                    "error_type": type(exc).__name__,
                }
            )
            raise

        finally:
            set_request_id("")


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware to limit request body size
    """

    def __init__(self, app: ASGIApp, max_size: Optional[int] = None):
        super().__init__(app)
        self.max_size = max_size if max_size is not None else settings.MAX_REQUEST_BYTES

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")

        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            logger.warning(
                f"Request body too large: {content_length} bytes (max: {self.max_size})",
                extra={
                    "event_type": "request_too_large",
                    "content_length": int(content_length),
                    "max_size": self.max_size,
                    "http_path": request.url.path,
                }
            )
            return JSONResponse(
                status_code=413,
                content={"message": f"Request body too large. Maximum size is {self.max_size // 1024 // 1024}MB"}
            )

        return await call_next(request)
