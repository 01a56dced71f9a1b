from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator


class PostState(BaseModel, extra="allow"):
    url: str = Field(..., min_length=1, description="Absolute URL of the post")

    @field_validator("url")
    @classmethod
    def must_be_absolute(cls, value: str) -> str:
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError("post URL must be absolute")
        parts.port  # raises ValueError on a malformed port
        return value


class PostEnvelope(BaseModel, extra="allow"):
    current: PostState


class GhostWebhook(BaseModel, extra="allow"):
    """Ghost ``post.published`` / ``post.published.edited`` webhook body."""

    post: PostEnvelope

    @property
    def post_url(self) -> str:
        return self.post.current.url
