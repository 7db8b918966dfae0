# concentribe/middleware.py
import os
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .logging_setup import request_id_var, get_logger

logger = get_logger("concentribe.http")

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = float(os.getenv("SLOW_REQUEST_MS", "2000"))
# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = {"/health"}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every log line of a request with its id and logs method, path, status and latency."""

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        token = request_id_var.set(req_id)
        path = request.url.path
        log = logger.debug if path in QUIET_PATHS else logger.info

        start = time.perf_counter()
        response: Optional[Response] = None

        try:
            log(f"REQUEST START: {request.method} {path}")
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = req_id
            return response
        except Exception:
            logger.exception(f"REQUEST EXCEPTION: {request.method} {path}")
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            status = getattr(response, "status_code", 500)
            if elapsed_ms > SLOW_REQUEST_MS:
                logger.warning(
                    f"SLOW REQUEST: {request.method} {path} -> {status} ({elapsed_ms:.1f} ms)",
                    extra={"elapsed_ms": round(elapsed_ms, 1)},
                )
            else:
                log(f"REQUEST END: {request.method} {path} -> {status} ({elapsed_ms:.1f} ms)")
            request_id_var.reset(token)
