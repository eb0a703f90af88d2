"""Data models for PhotoStudio UI state."""

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageSelection:
    """An uploaded source image.

    A selection is created on upload and replaced wholesale by the next one;
    it is never modified in place. ``selection_id`` identifies the upload so
    that late responses computed for an older image can be recognized.
    """

    path: Path
    mime_type: str
    size: int
    name: str = ""
    selection_id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass(frozen=True)
class EditRequest:
    """An (image, instruction) pair submitted for editing."""

    selection: ImageSelection
    instruction: str


@dataclass
class InteractionState:
    """Session state for the Gradio UI.

    Each user session owns one instance. Fields fall into two groups, each
    written by a single trigger: the upload/generate trigger owns
    ``selection``, ``result``, ``instruction``, ``is_generating`` and
    ``error``; the tagging sub-flow owns ``tags``, ``is_tagging`` and
    ``tagging_error``.

    Attributes
    ----------
    selection : ImageSelection | None
        Currently selected source image
    result : str | None
        Generated image as a data URL, or None when idle or failed
    tags : list[str]
        Tags for the current selection (empty while pending or on failure)
    instruction : str
        Edit instruction text
    is_generating : bool
        An edit request is in flight
    is_tagging : bool
        A recognition request is in flight
    error : str | None
        Upload or generation error message
    tagging_error : str | None
        Tagging error message
    generation_token : int
        Incremented on each generate request; completions carrying an older
        token are discarded
    """

    selection: ImageSelection | None = None
    result: str | None = None
    tags: list[str] = field(default_factory=list)
    instruction: str = ""
    is_generating: bool = False
    is_tagging: bool = False
    error: str | None = None
    tagging_error: str | None = None
    generation_token: int = 0

    def is_current(self, selection_id: str) -> bool:
        """Check whether ``selection_id`` still names the selected image."""
        return self.selection is not None and self.selection.selection_id == selection_id

    def can_generate(self) -> bool:
        """Check whether the generate action should be enabled."""
        return (
            not self.is_generating
            and self.selection is not None
            and bool(self.instruction.strip())
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        selection = self.selection.name if self.selection else None
        return (
            f"InteractionState(selection={selection}, tags={len(self.tags)}, "
            f"generating={self.is_generating}, tagging={self.is_tagging})"
        )


# Upload constraints
MAX_UPLOAD_BYTES = 4 * 1024 * 1024
MAX_UPLOAD_LABEL = "4MB"
ALLOWED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")
ALLOWED_EXTENSIONS = [".png", ".jpg", ".jpeg", ".webp"]

# Generated images are always delivered as PNG
RESULT_MIME_TYPE = "image/png"
DOWNLOAD_FILENAME = "edited-image.png"

EXAMPLE_PROMPTS = [
    "Remove the background",
    "Make the background white",
    "Improve lighting and colors",
    "Add a reflection underneath the product",
    "Give it a retro, vintage feel",
]
