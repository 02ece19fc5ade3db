"""
Starlette middleware giving every request an id.

A UUID received in `X-Request-ID` is reused; anything else is replaced with a
fresh uuid4. The id is bound to the logging context for the duration of the
request and returned in the response header.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .filters import reset_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(incoming: str | None) -> str:
    """Normalised incoming UUID, or a new one. Free text never reaches the logs."""
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
