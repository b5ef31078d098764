"""Configuration management for Restyler.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the RESTYLER_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (RESTYLER_* prefix)
2. .env file in the project root
3. Default values defined in RestylerConfig

Example .env file:
    RESTYLER_API_KEY=your-gemini-key
    RESTYLER_MODEL_NAME=gemini-2.5-flash-image
    RESTYLER_GRADIO_SERVER_PORT=7860

API Key
-------
The Gemini API key is the only required setting. It is read from
``RESTYLER_API_KEY``, falling back to ``GEMINI_API_KEY`` and then ``API_KEY``.
The key is optional at import time so that the module can be imported by
tooling and tests; every entry point calls :meth:`RestylerConfig.require_api_key`
before serving requests, which makes a missing key fatal at startup.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from restyler.core.config import config

    api_key = config.require_api_key()
    print(config.model_name)
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationMissing

API_KEY_ENV_VARS = ("RESTYLER_API_KEY", "GEMINI_API_KEY", "API_KEY")


class RestylerConfig(BaseSettings):
    """Main configuration for Restyler.

    Attributes
    ----------
    Remote Model Settings:
        api_key : str | None
            Gemini API key (required before serving requests)
        model_name : str
            Gemini model used for both transform and background removal

    Form Defaults:
        default_influence : int
            Initial value of the reference influence slider (0-100)
        default_quality : Literal["standard", "high"]
            Initial output quality selection

    API Server Settings:
        server_host : str
            Bind address for the FastAPI server
        server_port : int
            Port for the FastAPI server

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = RestylerConfig(api_key="test-key", default_influence=50)
        >>> custom_config.require_api_key()
        'test-key'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RESTYLER_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Remote model settings
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(*API_KEY_ENV_VARS),
        description="Gemini API key",
        repr=False,
    )
    model_name: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini model used for image generation and background removal",
    )

    # Form defaults
    default_influence: int = Field(
        default=75,
        ge=0,
        le=100,
        description="Default reference influence (0-100)",
    )
    default_quality: Literal["standard", "high"] = Field(
        default="standard",
        description="Default output quality",
    )

    # API server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="FastAPI server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="FastAPI server port",
        ge=1024,
        le=65535,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def require_api_key(self) -> str:
        """Return the API key, failing if it was not configured.

        Returns:
            The configured API key

        Raises:
            ConfigurationMissing: If no key is set (or it is blank)
        """
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationMissing(
                f"Gemini API key is not set. Define one of: {', '.join(API_KEY_ENV_VARS)}"
            )
        return self.api_key.strip()


# Global configuration instance
config = RestylerConfig()
