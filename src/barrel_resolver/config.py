"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from barrel_resolver.core.models import LoaderOptions


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BARREL_RESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "barrel-resolver"
    debug: bool = False
    log_level: str = "INFO"

    # Batch processing
    worker_count: int = 4
    # None uses the platform's multiprocessing default
    worker_start_method: str | None = None

    # File system
    max_file_size_bytes: int = 1_000_000  # 1MB
    barrel_file_names: frozenset[str] = frozenset(
        {"index.ts", "index.tsx", "index.js", "index.jsx"}
    )

    # Stage defaults
    remove_duplicates: bool = True
    sort: bool = False
    resolve_barrel_exports: bool = False
    convert_namespace_to_named: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return upper

    @field_validator("worker_count")
    @classmethod
    def validate_worker_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("worker_count must be >= 1")
        return v

    @field_validator("worker_start_method")
    @classmethod
    def validate_worker_start_method(cls, v: str | None) -> str | None:
        allowed = {"fork", "forkserver", "spawn"}
        if v is not None and v not in allowed:
            raise ValueError(f"worker_start_method must be one of {allowed}")
        return v

    def loader_options(self) -> LoaderOptions:
        """Build the default stage toggles from settings."""
        return LoaderOptions(
            remove_duplicates=self.remove_duplicates,
            sort=self.sort,
            resolve_barrel_exports=self.resolve_barrel_exports,
            convert_namespace_to_named=self.convert_namespace_to_named,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
