"""
Configuration module
====================

Loads runtime settings from environment variables (prefix ``DEEPFWD_``) and
an optional ``.env`` file: unwrap depth ceilings, the MIME timeout and the
log level.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """
    Application settings, read from ``DEEPFWD_*`` environment variables.

    Attributes:
        MIME_MAX_DEPTH: how many nested ``message/rfc822`` layers to descend
        INLINE_MAX_DEPTH: hard ceiling of the inline unwrap loop
        TIMEOUT_MS: budget for the MIME decoding stage, in milliseconds
        LOG_LEVEL: level of the ``deepfwd`` root logger
        MAX_BODY_CHARS: CLI output truncation of ``full_body`` (0 = unlimited)
    """
    MIME_MAX_DEPTH: int = 15
    INLINE_MAX_DEPTH: int = 15
    TIMEOUT_MS: int = 10000
    LOG_LEVEL: str = "INFO"
    MAX_BODY_CHARS: int = 0

    @field_validator("MIME_MAX_DEPTH", "INLINE_MAX_DEPTH", "TIMEOUT_MS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Depth ceilings and the timeout must be strictly positive."""
        if v is None or v <= 0:
            raise ValueError("depth limits and TIMEOUT_MS must be positive integers")
        return v

    @field_validator("MAX_BODY_CHARS")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("MAX_BODY_CHARS must be >= 0")
        return v

    class Config:
        env_file = ".env"
        env_prefix = "DEEPFWD_"
        case_sensitive = False
        extra = "ignore"


_settings_instance = None


def get_settings() -> Settings:
    """Return the cached settings singleton, creating it on first call."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next ``get_settings()`` re-reads the environment."""
    global _settings_instance
    _settings_instance = None
