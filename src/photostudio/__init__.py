"""PhotoStudio - AI product photo tagging and editing."""

__version__ = "0.1.0"

from photostudio.core.config import PhotoStudioConfig, config
from photostudio.core.gemini_client import GeminiStudioClient

__all__ = [
    "GeminiStudioClient",
    "PhotoStudioConfig",
    "config",
]
