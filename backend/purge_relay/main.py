import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from purge_relay.core.config import Settings, get_settings
from purge_relay.core.logging import configure_logging
from purge_relay.middleware.body_size import BodySizeLimitMiddleware
from purge_relay.services.cloudflare import CloudflareClient
from purge_relay.services.relay import PurgeRelay
from purge_relay.services.validation import ERROR_METHOD_NOT_ALLOWED

logger = logging.getLogger(__name__)

# Every method is routed to the relay so that it, not the router, answers 404/405
ALL_METHODS = [
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT",
]


def raw_path(request: Request) -> str:
    """The request path as sent, before percent-decoding."""
    raw = request.scope.get("raw_path")
    if raw is None:
        return request.url.path
    return raw.split(b"?", 1)[0].decode("latin-1")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Ghost Cloudflare Purge Relay",
        description="Purges Cloudflare cache entries when Ghost publishes or updates a post",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.relay = PurgeRelay(
        api_token=settings.cf_api_token,
        cloudflare=CloudflareClient(
            api_token=settings.cf_api_token,
            base_url=settings.cf_api_base_url,
            timeout=settings.cf_api_timeout,
        ),
    )

    # Add body size middleware
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)

    # Methods outside ALL_METHODS are refused by the router itself
    @app.exception_handler(405)
    async def method_not_allowed(request: Request, exc) -> PlainTextResponse:
        return PlainTextResponse(ERROR_METHOD_NOT_ALLOWED, status_code=405)

    # ---------- purge webhook ----------
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def purge_webhook(request: Request) -> PlainTextResponse:
        relay: PurgeRelay = request.app.state.relay
        body = await request.body() if request.method == "POST" else b""
        result = await relay.handle(
            method=request.method,
            content_type=request.headers.get("content-type"),
            path=raw_path(request),
            body=body,
        )
        return PlainTextResponse(result.body, status_code=result.status_code)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting purge relay on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
