"""
Vitrine Backend: Request ID Middleware
========================================

What:  Gives each request a short correlation ID and returns it in
       the X-Request-ID response header.
How:   Uses the client's X-Request-ID when present, otherwise the first
       8 characters of a UUID4. The ID is kept in a ContextVar (one value
       per request task) and on request.state.
Who:   Read by the access log and by every exception handler, which echo
       it in error bodies so an admin can quote it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client-supplied IDs longer than this are replaced
MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", "")
        if not rid or len(rid) > MAX_REQUEST_ID_LENGTH:
            rid = str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
