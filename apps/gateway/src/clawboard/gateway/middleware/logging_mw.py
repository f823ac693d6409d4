"""LoggingMiddleware -- 请求级日志

为每个 HTTP 请求确定 request_id，绑定到 structlog contextvars，
并在响应头 X-Request-ID 中返回。

面板前端会把自己生成的 X-Request-ID 带过来，格式合法时沿用，便于前后端日志对齐。
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]{7,63}")

# 探活接口被定时轮询，只在 debug 级别记录
_HEALTH_PATHS = frozenset({"/health", "/ready"})


def resolve_request_id(header_value: str | None) -> str:
    """沿用合法的外部 request_id，否则生成新的 ULID"""
    if header_value and _REQUEST_ID_PATTERN.fullmatch(header_value):
        return header_value
    return str(ULID())


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        start_time = time.monotonic()
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        log = structlog.get_logger()
        if path not in _HEALTH_PATHS:
            await log.ainfo("request_started")

        response = await call_next(request)

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.status_code >= 500:
            emit = log.aerror
        elif response.status_code >= 400:
            emit = log.awarning
        elif path in _HEALTH_PATHS:
            emit = log.adebug
        else:
            emit = log.ainfo
        await emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
