"""Environment-driven settings for the logout stage."""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.configuration import DEFAULT_LOGIN_PATH, DEFAULT_LOGOUT_PATH


class LogoutSettings(BaseSettings):
    """Logout settings read from ``NEO_LOGOUT_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_LOGOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    logout_path: str = Field(default=DEFAULT_LOGOUT_PATH)
    login_path: str = Field(default=DEFAULT_LOGIN_PATH)
    csrf_enabled: bool = Field(default=True)

    # Handler chain
    invalidate_session: bool = Field(default=True)
    clear_authentication: bool = Field(default=True)
    delete_cookies: List[str] = Field(default_factory=list)
    session_key_prefix: str = Field(default="auth_session")

    @field_validator("logout_path", "login_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("Paths must start with '/'")
        return v


@lru_cache()
def get_logout_settings() -> LogoutSettings:
    """Get cached logout settings."""
    return LogoutSettings()
