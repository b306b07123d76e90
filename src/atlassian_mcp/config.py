"""Environment-driven configuration for the Atlassian MCP server.

Each backend is enabled independently: it is configured only when its URL,
username and API token are all supplied. Settings are read once per process.
"""
import enum
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class BackendKind(str, enum.Enum):
    """Backend services the server can search."""

    CONFLUENCE = "confluence"
    JIRA = "jira"


class BackendConfig(BaseModel):
    """Complete credentials for one backend."""

    model_config = ConfigDict(frozen=True)

    url: str
    username: str
    api_token: str

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class Settings(BaseSettings):
    """Server settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    confluence_url: Optional[str] = None
    confluence_username: Optional[str] = None
    confluence_api_token: Optional[str] = None

    jira_url: Optional[str] = None
    jira_username: Optional[str] = None
    jira_api_token: Optional[str] = None

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def confluence(self) -> Optional[BackendConfig]:
        return _backend_config(self.confluence_url, self.confluence_username, self.confluence_api_token)

    @property
    def jira(self) -> Optional[BackendConfig]:
        return _backend_config(self.jira_url, self.jira_username, self.jira_api_token)


def _backend_config(
    url: Optional[str],
    username: Optional[str],
    api_token: Optional[str]
) -> Optional[BackendConfig]:
    # Partial credentials leave the backend disabled
    if not (url and username and api_token):
        return None
    return BackendConfig(url=url, username=username, api_token=api_token)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
