import logging
from dataclasses import dataclass

import httpx

from purge_relay.services import validation
from purge_relay.services.cloudflare import CloudflareClient
from purge_relay.services.planner import Action, derive_urls

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_BAD_GATEWAY = 502

ERROR_PURGE_UNREACHABLE = "Cache purge failed."


@dataclass(frozen=True)
class RelayResponse:
    status_code: int
    body: str

    @classmethod
    def from_rejection(cls, rejection: validation.Rejection) -> "RelayResponse":
        return cls(rejection.status_code, rejection.detail)


class PurgeRelay:
    """Turns one Ghost webhook into one Cloudflare cache purge."""

    def __init__(self, api_token: str | None, cloudflare: CloudflareClient):
        self.api_token = api_token
        self.cloudflare = cloudflare

    async def handle(
        self, method: str, content_type: str | None, path: str, body: bytes
    ) -> RelayResponse:
        rejection = validation.validate_request(method, content_type)
        if rejection:
            return RelayResponse.from_rejection(rejection)

        zone_id, action = validation.split_path(path)

        # Checked lazily so only the first failing step runs (and logs)
        checks = (
            lambda: validation.validate_zone_id(zone_id),
            lambda: validation.validate_action(action),
            lambda: validation.validate_api_token(self.api_token),
        )
        for check in checks:
            rejection = check()
            if rejection:
                return RelayResponse.from_rejection(rejection)

        payload, rejection = validation.parse_webhook_body(body)
        if rejection:
            return RelayResponse.from_rejection(rejection)

        webhook, rejection = validation.validate_webhook_body(payload)
        if rejection:
            return RelayResponse.from_rejection(rejection)

        urls = derive_urls(Action(action), webhook.post_url)
        return await self.purge(zone_id, urls)

    async def purge(self, zone_id: str, urls: list[str]) -> RelayResponse:
        try:
            response = await self.cloudflare.purge_files(zone_id, urls)
        except httpx.TransportError as e:
            logger.error(
                f"Purge request failed: Zone: {zone_id} - URLs: {', '.join(urls)} - Error: {e}",
                exc_info=True,
            )
            return RelayResponse(HTTP_BAD_GATEWAY, ERROR_PURGE_UNREACHABLE)

        if response.is_success:
            logger.info(f"Successfully purged: Zone: {zone_id} - URLs: {', '.join(urls)}")
            return RelayResponse(HTTP_OK, "OK")

        error_text = response.text
        logger.error(
            f"Purge failed: {response.status_code} {response.reason_phrase} - "
            f"Zone: {zone_id} - URLs: {', '.join(urls)} - Error: {error_text}"
        )
        return RelayResponse(response.status_code, response.reason_phrase)
