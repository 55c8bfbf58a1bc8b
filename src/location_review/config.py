import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

from location_review.entities import GeoBox

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis (resolved entries and users)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_key_prefix: str = os.getenv("REDIS_KEY_PREFIX", "location_review")

    # Upstream location source
    upstream_url: str = os.getenv("UPSTREAM_URL", "http://localhost:9000")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "10"))
    upstream_max_retries: int = int(os.getenv("UPSTREAM_MAX_RETRIES", "2"))
    upstream_retry_base_delay: float = float(os.getenv("UPSTREAM_RETRY_BASE_DELAY", "0.2"))

    # In-memory cache
    cache_max_bytes: int = int(os.getenv("CACHE_MAX_BYTES", str(1 << 30)))  # 1 GiB
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "10000000"))
    cache_shard_count: int = int(os.getenv("CACHE_SHARD_COUNT", "64"))
    cache_locations_ttl: int = int(os.getenv("CACHE_LOCATIONS_TTL", "60"))
    cache_detail_ttl: int = int(os.getenv("CACHE_DETAIL_TTL", "86400"))  # 1 day

    # Requests
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_shard_count < 1:
            raise ValueError("CACHE_SHARD_COUNT must be at least 1")

        if self.cache_max_bytes < self.cache_shard_count:
            raise ValueError("CACHE_MAX_BYTES must be at least CACHE_SHARD_COUNT")

        if self.upstream_max_retries < 0:
            raise ValueError("UPSTREAM_MAX_RETRIES must not be negative")

        if self.request_timeout <= 0:
            raise ValueError(f"REQUEST_TIMEOUT must be positive, got {self.request_timeout}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# Bounding boxes of the supported cities, keyed by city id.
CITY_BOXES: dict[int, GeoBox] = {
    1: GeoBox(36.852702785393014, 36.87286376953126, 36.535570922786015, 35.88409423828126),
    2: GeoBox(36.2104851748389, 36.81861877441407, 35.84286468375614, 35.82984924316407),
    3: GeoBox(36.495937096205274, 36.649870522206335, 36.064120488812605, 35.4740187605459),
    4: GeoBox(36.50903585150776, 36.402143998719424, 36.47976138594277, 36.31474829364722),
    5: GeoBox(36.64234742932176, 36.3232450328562, 36.53629731173617, 36.029282092441115),
    6: GeoBox(36.116001873480265, 36.06470054394251, 36.0627178139989, 35.91771907373497),
    7: GeoBox(38.53348725642158, 38.78062516773912, 37.32756763881127, 35.45481415037825),
    8: GeoBox(37.35461473302187, 38.0755896764663, 36.85431769725969, 36.67725839531126),
    9: GeoBox(39.065058845523424, 40.013647871307754, 37.86798402826048, 36.687836853946884),
    10: GeoBox(38.160827052916495, 39.33362355320935, 37.44250898099215, 37.35608449070936),
}


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
