"""
Dealerships API — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       The store address, seed files and listening port are never hard-coded.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Seed files shipped with the package
DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development against a
    MongoDB instance on localhost.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host:port
    mongo_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI (may embed credentials)",
    )
    mongo_db_name: str = Field(default="dealershipsDB")

    # How long the client waits to find a reachable server before failing.
    # Bounds both the startup ping and every query.
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    reviews_collection: str = Field(default="reviews")
    dealerships_collection: str = Field(default="dealerships")

    # ── Seeding ───────────────────────────────────────────────────────────
    # When true, both collections are wiped and reloaded on every start.
    seed_on_startup: bool = Field(default=True)
    seed_reviews_path: Optional[str] = Field(default=None)
    seed_dealerships_path: Optional[str] = Field(default=None)

    # ── Review ids ────────────────────────────────────────────────────────
    # Attempts at "read max id, insert max + 1" before giving up when
    # concurrent inserts keep colliding on the unique index.
    review_insert_max_attempts: int = Field(default=5, ge=1, le=50)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins, or "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3030, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def reviews_seed_file(self) -> Path:
        """Seed file for reviews; falls back to the packaged copy."""
        if self.seed_reviews_path:
            return Path(self.seed_reviews_path)
        return DATA_DIR / "reviews.json"

    @property
    def dealerships_seed_file(self) -> Path:
        """Seed file for dealerships; falls back to the packaged copy."""
        if self.seed_dealerships_path:
            return Path(self.seed_dealerships_path)
        return DATA_DIR / "dealerships.json"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URI and mongo_uri both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
