import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

load_dotenv()

CACHE_BACKENDS = ("memory", "redis")
LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Database
    database_url_override: str | None = os.getenv("DATABASE_URL")
    db_driver: str = os.getenv("DB_DRIVER", "mysql+aiomysql")
    db_host: str = os.getenv("DB_HOST", "localhost")
    db_port: int = int(os.getenv("DB_PORT", "3306"))
    db_user: str = os.getenv("DB_USER", "root")
    db_password: str = os.getenv("DB_PASSWORD", "")
    db_name: str = os.getenv("DB_NAME", "loja")
    db_create_schema: bool = os.getenv("DB_CREATE_SCHEMA", "false").lower() == "true"

    # Response cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "100"))  # seconds
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "storefront:response")

    # Redis (only used when CACHE_BACKEND=redis)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "3000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"
    environment: str = os.getenv("NODE_ENV", os.getenv("APP_ENV", "development"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info")
    log_format: str = os.getenv("LOG_FORMAT", "console")

    @property
    def is_production(self) -> bool:
        """Whether raw error details must be hidden from clients."""
        return self.environment.lower() == "production"

    @property
    def database_url(self) -> URL:
        """Build the SQLAlchemy URL from DATABASE_URL or the DB_* variables.

        Returns:
            The async SQLAlchemy URL for the configured database
        """
        if self.database_url_override:
            return make_url(self.database_url_override)
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError(f"CACHE_TTL must be a positive number of seconds, got {self.cache_ttl}")

        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {list(LOG_FORMATS)}, got {self.log_format!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=False,
    )
