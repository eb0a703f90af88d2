"""Configuration management for PhotoStudio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PHOTOSTUDIO_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PHOTOSTUDIO_* prefix)
2. .env file in the project root
3. Default values defined in PhotoStudioConfig

The API credential is the one exception to the prefix rule: it is also read
from ``GEMINI_API_KEY`` or ``API_KEY`` so that keys provisioned for other
Gemini tooling work unchanged.

Example .env file:
    PHOTOSTUDIO_API_KEY=your-gemini-key
    PHOTOSTUDIO_EDIT_MODEL=gemini-2.5-flash-image
    PHOTOSTUDIO_TAGGING_MODEL=gemini-2.5-flash
    PHOTOSTUDIO_GRADIO_SERVER_PORT=7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Loading never fails on a missing credential; the credential is checked by
``require_api_key()`` when the application starts, which makes its absence a
fatal startup condition rather than an import error.

Usage Example
-------------
    from photostudio.core.config import config

    print(config.edit_model)
    api_key = config.require_api_key()
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import MissingCredentialError


class PhotoStudioConfig(BaseSettings):
    """Main configuration for PhotoStudio.

    Attributes
    ----------
    Remote Model Settings:
        api_key : SecretStr | None
            Gemini API credential (PHOTOSTUDIO_API_KEY, GEMINI_API_KEY or API_KEY)
        edit_model : str
            Model used for instruction-based image editing
        tagging_model : str
            Model used for product recognition and tagging
        enable_tagging : bool
            Run the tagging sub-flow after each upload

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = PhotoStudioConfig(api_key="test", enable_tagging=False)
        >>> custom_config.require_api_key()
        'test'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PHOTOSTUDIO_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Remote model settings
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "PHOTOSTUDIO_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="Gemini API credential",
    )
    edit_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini model used for image editing (must support image output)",
    )
    tagging_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used for object recognition and tagging",
    )
    enable_tagging: bool = Field(
        default=True,
        description="Generate descriptive tags for every uploaded image",
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
        """Return the API credential, failing if it was never provisioned.

        Returns:
            The plain-text API key

        Raises:
            MissingCredentialError: If no key was found in the environment or .env
        """
        if self.api_key is None or not self.api_key.get_secret_value().strip():
            raise MissingCredentialError(
                "API key is not set. Provide PHOTOSTUDIO_API_KEY or GEMINI_API_KEY."
            )
        return self.api_key.get_secret_value()


# Global configuration instance
config = PhotoStudioConfig()
