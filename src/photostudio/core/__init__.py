"""Core functionality for PhotoStudio.

This module provides the non-UI building blocks:

- **PhotoStudioConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **GeminiStudioClient**: Remote generation client (image editing and tagging)
- **Typed errors**: ImageEditError / RecognitionError with explicit categories
"""

from photostudio.core.config import PhotoStudioConfig, config
from photostudio.core.errors import (
    EditErrorCategory,
    ImageEditError,
    MissingCredentialError,
    RecognitionError,
    RecognitionErrorCategory,
)
from photostudio.core.gemini_client import GeminiStudioClient

__all__ = [
    "EditErrorCategory",
    "GeminiStudioClient",
    "ImageEditError",
    "MissingCredentialError",
    "PhotoStudioConfig",
    "RecognitionError",
    "RecognitionErrorCategory",
    "config",
]
