"""
Request validation steps for the purge webhook.

Every step returns ``None`` when the check passes, or a ``Rejection`` holding
the terminal response for the caller. The relay runs them in order and stops
at the first rejection.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from purge_relay.schemas.webhook import GhostWebhook
from purge_relay.services.planner import Action

logger = logging.getLogger(__name__)

HTTP_BAD_REQUEST = 400
HTTP_METHOD_NOT_ALLOWED = 405
HTTP_INTERNAL_ERROR = 500

ERROR_METHOD_NOT_ALLOWED = "Method not allowed. Only POST requests are accepted."
ERROR_INVALID_CONTENT_TYPE = "Invalid content type. Only application/json is accepted."
ERROR_MISSING_ZONE_ID = "Missing zone ID in URL path."
ERROR_INVALID_ZONE_FORMAT = "Invalid zone ID format."
ERROR_MISSING_ACTION = "Missing action in URL path."
ERROR_INVALID_ACTION = (
    "Invalid action. Allowed actions: "
    + ", ".join(action.value for action in Action)
    + "."
)
ERROR_MISSING_API_TOKEN = "Missing Cloudflare API token in environment."
ERROR_INVALID_WEBHOOK = "Invalid webhook payload structure."

ZONE_ID_PATTERN = re.compile(r"[a-f0-9]{32}", re.IGNORECASE)


@dataclass(frozen=True)
class Rejection:
    status_code: int
    detail: str


def split_path(path: str) -> tuple[str | None, str | None]:
    """Return the (zone_id, action) segments of ``/{zone_id}/{action}``."""
    segments = [segment for segment in path.split("/") if segment]
    zone_id = segments[0] if segments else None
    action = segments[1] if len(segments) > 1 else None
    return zone_id, action


def validate_request(method: str, content_type: str | None) -> Rejection | None:
    if method != "POST":
        return Rejection(HTTP_METHOD_NOT_ALLOWED, ERROR_METHOD_NOT_ALLOWED)

    if "application/json" not in (content_type or ""):
        return Rejection(HTTP_BAD_REQUEST, ERROR_INVALID_CONTENT_TYPE)

    return None


def validate_zone_id(zone_id: str | None) -> Rejection | None:
    if not zone_id:
        return Rejection(HTTP_BAD_REQUEST, ERROR_MISSING_ZONE_ID)

    if not ZONE_ID_PATTERN.fullmatch(zone_id):
        return Rejection(HTTP_BAD_REQUEST, ERROR_INVALID_ZONE_FORMAT)

    return None


def validate_action(action: str | None) -> Rejection | None:
    if not action:
        return Rejection(HTTP_BAD_REQUEST, ERROR_MISSING_ACTION)

    if action not in {a.value for a in Action}:
        return Rejection(HTTP_BAD_REQUEST, ERROR_INVALID_ACTION)

    return None


def validate_api_token(api_token: str | None) -> Rejection | None:
    if not api_token:
        logger.error("Missing CF_API_TOKEN in environment variables")
        return Rejection(HTTP_INTERNAL_ERROR, ERROR_MISSING_API_TOKEN)

    return None


def parse_webhook_body(raw: bytes) -> tuple[Any, Rejection | None]:
    """Decode the raw body as JSON."""
    try:
        return json.loads(raw), None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Failed to parse webhook body: {e}")
        return None, Rejection(HTTP_BAD_REQUEST, ERROR_INVALID_WEBHOOK)


def validate_webhook_body(body: Any) -> tuple[GhostWebhook | None, Rejection | None]:
    try:
        return GhostWebhook.model_validate(body), None
    except ValidationError as ve:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "<root>"
            for error in ve.errors()
        )
        logger.error(f"Invalid webhook payload: missing or invalid {fields}")
        return None, Rejection(HTTP_BAD_REQUEST, ERROR_INVALID_WEBHOOK)
