import logging

import httpx

logger = logging.getLogger(__name__)


class CloudflareClient:
    """Minimal client for the zone cache purge endpoint."""

    def __init__(
        self,
        api_token: str | None,
        base_url: str,
        timeout: float | None = None,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def purge_endpoint(self, zone_id: str) -> str:
        return f"{self.base_url}/zones/{zone_id}/purge_cache"

    async def purge_files(self, zone_id: str, urls: list[str]) -> httpx.Response:
        """Ask Cloudflare to evict ``urls`` from the edge cache of ``zone_id``.

        Exactly one request is made and the response is returned as is; the
        caller decides what a non-2xx status means.
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_token}",
        }
        logger.debug(f"Purging {len(urls)} URLs from zone {zone_id}")
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(
                self.purge_endpoint(zone_id), json={"files": urls}, headers=headers
            )
