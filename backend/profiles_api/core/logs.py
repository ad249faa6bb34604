import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

request_logger = logging.getLogger("profiles_api.request")

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if console_handler not in root.handlers:
        root.addHandler(console_handler)
    root.setLevel(level.upper())


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request: method, path, status and elapsed time.
    Requests that blow up are logged with status 500 before re-raising.
    """
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        client = request.client.host if request.client else "-"
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            request_logger.info(
                "%s %s %s %.1fms client=%s",
                request.method,
                request.url.path,
                status,
                elapsed_ms,
                client,
            )
