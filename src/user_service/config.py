import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # PostgreSQL (same variable names libpq uses)
    db_host: str = field(default_factory=lambda: os.getenv("PGHOST", "localhost"))
    db_port: int = field(default_factory=lambda: int(os.getenv("PGPORT", "5432")))
    db_user: str = field(default_factory=lambda: os.getenv("PGUSER", "postgres"))
    db_password: str | None = field(default_factory=lambda: os.getenv("PGPASSWORD"))
    db_name: str = field(default_factory=lambda: os.getenv("PGDATABASE", "postgres"))

    # Pool
    db_pool_min_size: int = field(default_factory=lambda: int(os.getenv("DB_POOL_MIN_SIZE", "1")))
    db_pool_max_size: int = field(default_factory=lambda: int(os.getenv("DB_POOL_MAX_SIZE", "10")))
    # Deadline applied to every statement, in seconds
    db_query_timeout: float = field(
        default_factory=lambda: float(os.getenv("DB_QUERY_TIMEOUT", "5.0"))
    )

    # API
    api_host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # Observability
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    metrics_enabled: bool = field(default_factory=lambda: _env_bool("METRICS_ENABLED", "true"))

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 1 <= self.api_port <= 65535:
            raise ValueError(f"PORT must be between 1 and 65535, got {self.api_port}")

        if not 1 <= self.db_port <= 65535:
            raise ValueError(f"PGPORT must be between 1 and 65535, got {self.db_port}")

        if self.db_pool_min_size < 1 or self.db_pool_max_size < self.db_pool_min_size:
            raise ValueError(
                "DB_POOL_MIN_SIZE must be >= 1 and <= DB_POOL_MAX_SIZE, "
                f"got min={self.db_pool_min_size} max={self.db_pool_max_size}"
            )

        if self.db_query_timeout <= 0:
            raise ValueError("DB_QUERY_TIMEOUT must be greater than 0")

    def describe(self) -> dict[str, object]:
        """Settings summary safe to log (no password)."""
        return {
            "db_host": self.db_host,
            "db_port": self.db_port,
            "db_user": self.db_user,
            "db_name": self.db_name,
            "db_pool": f"{self.db_pool_min_size}-{self.db_pool_max_size}",
            "db_query_timeout": self.db_query_timeout,
            "api_port": self.api_port,
            "metrics_enabled": self.metrics_enabled,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
