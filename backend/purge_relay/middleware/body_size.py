import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to reject JSON POST bodies larger than ``max_body_size`` bytes.

    Other requests pass through untouched so the relay answers them with its
    own 405/400.
    """

    def __init__(self, app, max_body_size: int = 1_048_576):  # 1 MiB
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method != "POST":
            return await call_next(request)
        if "application/json" not in request.headers.get("content-type", ""):
            return await call_next(request)

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_body_size:
                logger.warning(
                    f"Rejected {request.method} {request.url.path}: "
                    f"body of {content_length} bytes exceeds {self.max_body_size}"
                )
                return PlainTextResponse("Payload too large", status_code=413)
        return await call_next(request)
