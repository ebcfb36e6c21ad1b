"""Request tracing and access logging.

Each request carries a request ID, taken from ``X-Request-ID`` or
generated, which is bound to the structlog context for every event logged
while the request is handled and echoed back on the response.
"""

import secrets
import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

# Probes and docs are not access-logged
SKIPPED_PATH_PREFIXES = ("/health/", "/docs", "/redoc", "/openapi.json")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds the request ID to ``request.state`` and the log context."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(16)
        # The error handlers report it as trace_id
        request.state.trace_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one ``request_completed`` event per request.

    5xx responses log at error level and 4xx at warning. Requests to
    tenant-scoped routes also log the tenant ID.
    """

    def __init__(
        self, app: Any, skipped_prefixes: tuple[str, ...] = SKIPPED_PATH_PREFIXES
    ) -> None:
        super().__init__(app)
        self.skipped_prefixes = skipped_prefixes

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path.startswith(self.skipped_prefixes):
            return await call_next(request)

        log = logger.bind(
            method=request.method,
            path=request.url.path,
            client_ip=client_ip(request),
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            log.exception("request_failed", duration_ms=_elapsed_ms(started))
            raise

        tenant_id = request.path_params.get("tenant_id")
        if tenant_id:
            log = log.bind(tenant_id=tenant_id)

        if response.status_code >= 500:
            emit = log.error
        elif response.status_code >= 400:
            emit = log.warning
        else:
            emit = log.info
        emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
        )
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def client_ip(request: Request) -> str | None:
    """First ``X-Forwarded-For`` hop, falling back to the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",", 1)[0].strip()
    return request.client.host if request.client else None
