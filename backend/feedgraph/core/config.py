# backend/feedgraph/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ---- Core ----
    PROJECT_NAME: str = "Feed Graph API"
    ENV: str = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ---- Database / CORS ----
    # SYNC sqlite URL (e.g. sqlite:///./data/graph.sqlite3)
    DATABASE_URL: str = "sqlite:///./data/graph.sqlite3"
    # Comma-separated allowed origins
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # ---- Rankings ----
    RANK_LIMIT: int = 20
    MENTION_LIMIT: int = 30
    NEW_FEED_DAYS: int = 30
    DEFAULT_ENTITY_TYPE: str = "PERSON"

    # Hosts hidden by the filtered ranking (comma-separated)
    COMMON_DOMAINS: str = (
        "github.com,twitter.com,x.com,youtube.com,linkedin.com,huggingface.co,"
        "news.ycombinator.com,arxiv.org,nytimes.com,openai.com,anthropic.com,"
        "google.com,medium.com,substack.com,podcasts.apple.com,scholar.google.com,"
        "en.wikipedia.org,reddit.com,facebook.com"
    )
    # fetch limit * N rows before dropping common domains
    COMMON_DOMAIN_OVERFETCH: int = 5

    # ---- Snapshots ----
    SNAPSHOT_RETENTION_DAYS: int = 90

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def common_domains_list(self) -> list[str]:
        return [d.strip().lower() for d in self.COMMON_DOMAINS.split(",") if d.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


# singleton (import this everywhere)
settings = get_settings()
