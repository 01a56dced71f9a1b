from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    cf_api_token: str | None = None
    cf_api_base_url: str = "https://api.cloudflare.com/client/v4"
    cf_api_timeout: float | None = None  # no client-side timeout by default
    max_body_size: int = 1_048_576  # 1 MiB
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Treat an empty CF_API_TOKEN the same as an unset one
        if not self.cf_api_token:
            self.cf_api_token = None
        self.cf_api_base_url = self.cf_api_base_url.rstrip("/")

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
