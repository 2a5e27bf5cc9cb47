"""Service configuration via environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

from tools.llm_client import DEFAULT_MODEL


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


class AppConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    anthropic_api_key: str = Field(default="")
    model: str = Field(default=DEFAULT_MODEL)
    max_tokens: int = Field(default=2048)
    temperature: float = Field(default=0.7)
    completion_endpoint_url: str = Field(default="")
    simplify_endpoint_url: str = Field(default="")
    enhancement_timeout_seconds: float = Field(default=30.0)
    extraction_timeout_seconds: float = Field(default=60.0)
    enhancement_max_attempts: int = Field(default=1)
    max_upload_mb: int = Field(default=10)
    session_ttl_minutes: int = Field(default=60)
    max_sessions: int = Field(default=1000)
    cors_origins: list[str] = Field(default_factory=list)
    log_level: str = Field(default="INFO")
    production_mode: bool = Field(default=False)

    @field_validator("max_tokens", "enhancement_max_attempts", "max_upload_mb", "session_ttl_minutes", "max_sessions")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("enhancement_timeout_seconds", "extraction_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeouts must be > 0")
        return value

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("temperature must be between 0 and 1")
        return value

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> AppConfig:
        """Build config from environment variables."""
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            model=os.getenv("JUSTICEALLY_MODEL", DEFAULT_MODEL),
            max_tokens=int(os.getenv("JUSTICEALLY_MAX_TOKENS", "2048")),
            temperature=float(os.getenv("JUSTICEALLY_TEMPERATURE", "0.7")),
            completion_endpoint_url=os.getenv("COMPLETION_ENDPOINT_URL", "").strip(),
            simplify_endpoint_url=os.getenv("SIMPLIFY_ENDPOINT_URL", "").strip(),
            enhancement_timeout_seconds=float(os.getenv("ENHANCEMENT_TIMEOUT_SECONDS", "30")),
            extraction_timeout_seconds=float(os.getenv("EXTRACTION_TIMEOUT_SECONDS", "60")),
            enhancement_max_attempts=int(os.getenv("ENHANCEMENT_MAX_ATTEMPTS", "1")),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", "10")),
            session_ttl_minutes=int(os.getenv("SESSION_TTL_MINUTES", "60")),
            max_sessions=int(os.getenv("MAX_SESSIONS", "1000")),
            cors_origins=origins,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            production_mode=_flag(os.getenv("PRODUCTION_MODE", "")),
        )


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Return the global config singleton, creating it on first access."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next access re-reads the environment."""
    global _config
    _config = None
