"""Configuration management for hookclip."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    public_base_url: str = "http://localhost:8000"

    # Analysis collaborator
    analysis_backend: Literal["fake", "http"] = "fake"
    analysis_url: str = "http://localhost:7870"
    analysis_timeout_sec: float = 120.0

    # Render collaborator
    render_backend: Literal["fake", "http"] = "fake"
    render_url: str = "http://localhost:7880"
    render_timeout_sec: float = 30.0
    fake_render_delay_sec: float = 1.8

    # Job lifecycle
    queued_timeout_sec: float = 60.0
    processing_timeout_sec: float = 900.0
    sweep_interval_sec: float = 5.0
    job_retention_sec: float = 3600.0
    dedupe_policy: Literal["always_new", "reuse_in_flight"] = "always_new"

    @property
    def render_callback_url(self) -> str:
        """URL the render backend posts progress events to."""
        return f"{self.public_base_url.rstrip('/')}/api/v1/render-events"


# Global settings instance
settings = Settings()
