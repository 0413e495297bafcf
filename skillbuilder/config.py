"""Skillbuilder configuration — loaded from environment / .env file."""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SKILLBUILDER_", extra="ignore")

    env: str = "development"
    log_level: str = "INFO"

    # Anthropic generation API
    anthropic_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("SKILLBUILDER_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY"),
    )
    anthropic_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 2048
    generation_timeout: float = 60.0  # seconds

    # Persistence
    storage_backend: Literal["file", "sql"] = "file"
    library_dir: Path = Path("library")
    database_url: str = "sqlite+aiosqlite:///./skillbuilder.db"

    # Prompt limits
    max_prompt_length: int = 2000
    min_prompt_length: int = 10
    max_body_bytes: int = 10 * 1024

    # Rate limiting (fixed windows, per client IP)
    rate_limit_requests: int = 100
    rate_limit_window: int = 15 * 60
    generate_limit_requests: int = 20
    generate_limit_window: int = 60 * 60

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev

    # Serve the built SPA from this process
    serve_static: bool = False
    static_dir: Path = Path("client/dist")


settings = Settings()
