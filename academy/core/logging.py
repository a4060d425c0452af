import logging
import sys
import time
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger
from starlette.requests import Request

from academy.core.config import Settings
from academy.core.middleware import current_correlation_id

api_logger = logging.getLogger("academy.api")


class CorrelationIdFilter(logging.Filter):
    """Stamps the active correlation id on records that do not carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = current_correlation_id()
        return True


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # clear handlers if reloaded
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(correlation_id)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )
    root.addHandler(handler)

    for noisy in ("uvicorn.access", "uvicorn.error"):
        logging.getLogger(noisy).setLevel(level)
    if settings.environment == "production":
        logging.getLogger("httpx").setLevel(logging.WARNING)


def log_api_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    correlation_id: Optional[str] = None,
    **context: Any,
) -> None:
    """
    One line per handled API call. 5xx logs at ERROR, 4xx at WARNING.
    """
    extra: Dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
        "correlation_id": correlation_id or current_correlation_id(),
        **context,
    }
    level = logging.ERROR if status_code >= 500 else logging.WARNING if status_code >= 400 else logging.INFO
    api_logger.log(level, "%s %s %s", method, path, status_code, extra=extra)


def track_api_request(request: Request) -> None:
    """
    Route dependency marking a call for log_tracked_request. Runs before body
    validation, so rejected payloads are still logged.
    """
    request.state.api_started = time.perf_counter()


def log_tracked_request(request: Request, status_code: int, **context: Any) -> None:
    started = getattr(request.state, "api_started", None)
    if started is None:
        return
    log_api_request(
        request.method,
        request.url.path,
        int(status_code),
        (time.perf_counter() - started) * 1000,
        getattr(request.state, "request_id", None),
        **context,
    )
