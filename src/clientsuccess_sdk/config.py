"""
Configuration management for ClientSuccess SDK.

This module provides ClientSuccessSettings class that handles all SDK configuration
with support for environment variables, .env files, and sensible defaults.

Environment variables are automatically loaded with CLIENTSUCCESS_ prefix.
Example: CLIENTSUCCESS_USERNAME=api@example.com
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class ClientSuccessSettings(BaseSettings):
    """
    Configuration settings for ClientSuccess SDK with environment variable support.

    This class automatically loads configuration from:
    - Environment variables (with CLIENTSUCCESS_ prefix)
    - .env files
    - Default values for optional settings

    The events project ID and API key are only needed for activity tracking,
    which posts to a separate usage-collector host.

    Example:
        # From environment
        export CLIENTSUCCESS_USERNAME=api@example.com
        export CLIENTSUCCESS_PASSWORD=secret

        # In code
        settings = ClientSuccessSettings()
    """

    username: str = Field(..., description="ClientSuccess API username")
    password: str = Field(..., description="ClientSuccess API password")
    base_url: str = "https://api.clientsuccess.com/v1/"
    usage_url: str = "https://usage.clientsuccess.com/collector/1.0.0"
    events_project_id: str | None = None
    events_api_key: str | None = None
    timeout: float = 30.0
    transport: str = "httpx"  # default, can be 'aiohttp' or 'requests'
    retry_limit: int = Field(default=10, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="CLIENTSUCCESS_", env_file=".env", extra="ignore"
    )
