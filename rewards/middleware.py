import logging
import re
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("rewards")

SKIP_LOG_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}
PROCESS_PATH = "/receipts/process"
POINTS_PATH_RE = re.compile(r"/receipts/([^/]+)/points")


def _log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each receipt request with its status and duration.

    Lookups carry the requested receipt id; submissions carry the parse
    policy they were scored under.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = round((time.time() - start) * 1000)

        path = request.url.path
        if path in SKIP_LOG_PATHS:
            return response

        data = {
            "method": request.method,
            "path": path,
            "status": response.status_code,
            "duration_ms": duration_ms,
        }
        match = POINTS_PATH_RE.fullmatch(path)
        if match:
            data["receipt_id"] = match.group(1)
        elif path == PROCESS_PATH:
            data["parse_policy"] = request.app.state.parse_policy.value

        logger.log(
            _log_level(response.status_code),
            f"{request.method} {path} {response.status_code}",
            extra={"extra_data": data},
        )
        return response
