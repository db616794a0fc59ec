"""Access log plus request-id correlation.

Each request gets ``request.state.request_id``; the envelope and the
``X-Request-ID`` response header both carry it. A well-formed inbound
``X-Request-ID`` from a proxy is reused instead of minting a new one.

    INFO [GET] /api/v1/products -> 200 (12ms) req_3f9c0a1b2d4e
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("rc.request")

REQUEST_ID_HEADER = "X-Request-ID"
_INBOUND_ID = re.compile(r"^[A-Za-z0-9_.-]{8,64}$")


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _request_id_for(request: Request) -> str:
    inbound = request.headers.get(REQUEST_ID_HEADER, "")
    return inbound if _INBOUND_ID.match(inbound) else new_request_id()


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = _request_id_for(request)
        request.state.request_id = rid

        started = time.perf_counter()
        response = await call_next(request)
        took_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = rid
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s -> %d (%.0fms) %s",
            request.method, request.url.path, response.status_code, took_ms, rid,
        )
        return response
