import json
import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("redis", "memory")
LOG_FORMATS = ("text", "json")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Storage backend for the store, the response cache and the rate limiter
    storage_backend: str = os.getenv("STORAGE_BACKEND", "redis")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Key-value store
    kv_namespace: str = os.getenv("KV_NAMESPACE", "kv")
    kv_list_limit: int = int(os.getenv("KV_LIST_LIMIT", "1000"))

    # Response cache
    cache_prefix: str = os.getenv("CACHE_PREFIX", "response_cache")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "60"))

    # Rate limiting
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "10"))
    rate_limit_period: int = int(os.getenv("RATE_LIMIT_PERIOD", "60"))
    rate_limit_prefix: str = os.getenv("RATE_LIMIT_PREFIX", "rate_limit")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_format: str = os.getenv("LOG_FORMAT", "text").lower()

    @property
    def uses_redis(self) -> bool:
        """Check if the Redis-backed adapters are configured.

        Returns:
            True if STORAGE_BACKEND is redis, False for in-memory adapters
        """
        return self.storage_backend == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {list(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {list(LOG_FORMATS)}, got {self.log_format!r}")

        for name in ("kv_list_limit", "cache_ttl", "rate_limit_per_minute", "rate_limit_period"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be a positive integer")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance.

    Args:
        config: Settings to read REDIS_URL and REDIS_PASSWORD from. Defaults to settings.
    """
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line)


def configure_logging(config: Settings | None = None) -> None:
    """Configure root logging: one JSON object per line, or human-readable text.

    Args:
        config: Settings to read LOG_LEVEL and LOG_FORMAT from. Defaults to settings.
    """
    config = config or settings
    handler = logging.StreamHandler(sys.stdout)
    if config.log_format == "json":
        handler.setFormatter(_JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=config.log_level, handlers=[handler], force=True)
