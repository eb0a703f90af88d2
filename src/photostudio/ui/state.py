"""State management utilities for PhotoStudio UI.

This module handles the initialization of the components shared by all
sessions. Per-session interaction state lives in ``InteractionState`` and is
held by Gradio; the remote generation client is stateless and therefore
created once per process.
"""

import logging

from photostudio.core.config import PhotoStudioConfig, config
from photostudio.core.gemini_client import GeminiStudioClient

from .models import InteractionState

logger = logging.getLogger(__name__)

_studio_client: GeminiStudioClient | None = None


def initialize_studio_client(cfg: PhotoStudioConfig | None = None) -> GeminiStudioClient:
    """Create the process-wide remote generation client.

    Args:
        cfg: Configuration to use (default: global config)

    Returns:
        Initialized GeminiStudioClient

    Raises:
        MissingCredentialError: If no API key is configured
    """
    global _studio_client

    cfg = cfg or config
    logger.info(
        f"Initializing GeminiStudioClient (edit={cfg.edit_model}, tagging={cfg.tagging_model})"
    )
    _studio_client = GeminiStudioClient(cfg)
    return _studio_client


def get_studio_client() -> GeminiStudioClient:
    """Return the shared client, creating it on first use."""
    if _studio_client is None:
        return initialize_studio_client()
    return _studio_client


def reset_studio_client() -> None:
    """Forget the shared client so the next call rebuilds it."""
    global _studio_client
    _studio_client = None


def initialize_interaction_state(state: InteractionState | None = None) -> InteractionState:
    """Return ``state``, creating a fresh one if it is None."""
    if state is None:
        logger.info("Creating new InteractionState")
        state = InteractionState()
    return state
