from typing import Iterator

import pytest
import respx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from purge_relay.core.config import Settings
from purge_relay.main import create_app

ZONE_ID = "023e105f4ecef8ad9ca31a8372d0c353"
API_TOKEN = "test-token"
POST_URL = "https://example.com/my-post/"
CF_API_BASE_URL = "https://api.cloudflare.com/client/v4"
PURGE_URL = f"{CF_API_BASE_URL}/zones/{ZONE_ID}/purge_cache"


def ghost_webhook(url: str = POST_URL) -> dict:
    """A trimmed-down Ghost ``post.published`` webhook body."""
    return {
        "post": {
            "current": {
                "id": "6555b2a3c9e1f2001a8f1d2e",
                "title": "My post",
                "slug": "my-post",
                "status": "published",
                "url": url,
            },
            "previous": {},
        }
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        cf_api_token=API_TOKEN, cf_api_base_url=CF_API_BASE_URL, _env_file=None
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def cloudflare() -> Iterator[respx.MockRouter]:
    """Mock Cloudflare's API; any request to an unmocked route fails the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def purge_route(cloudflare: respx.MockRouter) -> respx.Route:
    return cloudflare.post(PURGE_URL)
