from enum import Enum
from urllib.parse import urlsplit


class Action(str, Enum):
    POST_PUBLISHED = "postPublished"
    POST_UPDATED = "postUpdated"


# Site-wide resources that change whenever a post is published or edited
SITE_PATHS = (
    "/sitemap.xml",
    "/sitemap-posts.xml",
    "/sitemap-pages.xml",
    "/sitemap-tags.xml",
    "/sitemap-news/",  # Ghost custom news sitemap index
    "/rss/",
)

DEFAULT_PORTS = {"http": 80, "https": 443}


def root_url(post_url: str) -> str:
    """Scheme and host of ``post_url``, without path, query or credentials."""
    parts = urlsplit(post_url)
    scheme = parts.scheme.lower()
    host = parts.netloc.rpartition("@")[2].lower()
    if parts.port is not None and parts.port == DEFAULT_PORTS.get(scheme):
        host = host.rpartition(":")[0]
    return f"{scheme}://{host}"


def derive_urls(action: Action | str, post_url: str) -> list[str]:
    """Return the ordered list of URLs to purge for a post event.

    A newly published post shows up on the homepage listing, so the homepage
    is purged. An edited post already existed, so only its own page is.
    """
    action = Action(action)
    root = root_url(post_url)
    urls = [f"{root}{path}" for path in SITE_PATHS]

    if action is Action.POST_PUBLISHED:
        urls.append(root)
    elif action is Action.POST_UPDATED:
        urls.append(post_url)

    return urls
