import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def current_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Reuses the caller's correlation id or mints one, exposes it on
    request.state and to log records, and echoes it in the response.
    """

    def __init__(self, app, header_name: str = "X-Correlation-Id"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = correlation_id
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers[self.header_name] = correlation_id
        return response
