"""Upload, tagging and generation workflow for the PhotoStudio UI.

The workflow operates on an ``InteractionState`` and has two independent
triggers:

- **Upload**: ``select_image`` validates the file and replaces the selection,
  then ``tag_selection`` runs the tagging sub-flow for it.
- **Generate**: ``begin_generation`` validates the request and marks it in
  flight, then ``run_generation`` encodes the image, calls the edit model and
  records the outcome.

Each trigger is split into a synchronous step, so the UI can render the
pending state immediately, and a coroutine that is awaited start-to-finish.
In-progress flags are only cleared by that coroutine once the remote call has
resolved, on success and on failure alike.

Responses are matched against the state before they are applied. A tagging
response computed for an image that has since been replaced is dropped, and
so is a generation response superseded by a newer generate request or a new
upload.
"""

import asyncio
import base64
import logging
from dataclasses import dataclass
from pathlib import Path

from photostudio.core.errors import ImageEditError, RecognitionError

from .models import RESULT_MIME_TYPE, EditRequest, ImageSelection, InteractionState
from .validation import ValidationError, load_selection, validate_edit_request

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = "Failed to read the image file."
UNEXPECTED_ERROR_MESSAGE = "An unknown error occurred."


@dataclass(frozen=True)
class PendingGeneration:
    """A generate request that passed validation and is awaiting its result."""

    token: int
    request: EditRequest


def to_data_url(image_data: str, mime_type: str = RESULT_MIME_TYPE) -> str:
    """Wrap base64 image data in a displayable data URL."""
    return f"data:{mime_type};base64,{image_data}"


def _read_base64(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("ascii")


async def encode_selection(selection: ImageSelection) -> str:
    """Read the selected file and return its base64 encoding.

    Args:
        selection: Image to encode

    Returns:
        Base64 string of the file contents

    Raises:
        OSError: If the file can no longer be read
    """
    return await asyncio.to_thread(_read_base64, selection.path)


def set_instruction(state: InteractionState, instruction: str | None) -> InteractionState:
    """Store the edit instruction typed (or picked) by the user."""
    state.instruction = instruction or ""
    return state


def select_image(
    state: InteractionState, path: str | Path, tagging: bool = True
) -> str | None:
    """Handle an image upload.

    A rejected upload only sets ``error``; the current selection and
    everything derived from it are left untouched.

    Args:
        state: Session state
        path: Path of the uploaded file
        tagging: Whether a tagging sub-flow will follow this upload

    Returns:
        The new selection id, or None if the upload was rejected
    """
    try:
        selection = load_selection(path)
    except ValidationError as e:
        logger.warning(f"Upload rejected: {e}")
        state.error = str(e)
        return None

    state.selection = selection
    state.result = None
    state.error = None
    state.tags = []
    state.tagging_error = None
    state.instruction = ""
    state.is_tagging = tagging

    logger.info(f"Selected {selection.name} ({selection.mime_type}, {selection.size} bytes)")
    return selection.selection_id


async def tag_selection(state: InteractionState, client, selection_id: str) -> InteractionState:
    """Run the tagging sub-flow for a selection.

    Args:
        state: Session state
        client: Remote generation client (GeminiStudioClient)
        selection_id: Selection the tags are requested for

    Returns:
        The state, with tags or a tagging error applied if the selection is
        still current
    """
    if not state.is_current(selection_id):
        logger.debug(f"Skipping tagging for superseded selection {selection_id}")
        return state

    selection = state.selection
    tags: list[str] = []
    tagging_error = None

    try:
        encoded = await encode_selection(selection)
        tags = await client.recognize_objects(encoded, selection.mime_type)
    except RecognitionError as e:
        tagging_error = e.user_message
    except OSError as e:
        logger.error(f"Failed to read {selection.path}: {e}")
        tagging_error = READ_ERROR_MESSAGE
    except Exception as e:
        logger.error(f"Unexpected error while tagging: {e}", exc_info=True)
        tagging_error = UNEXPECTED_ERROR_MESSAGE

    if not state.is_current(selection_id):
        logger.debug(f"Discarding tags for superseded selection {selection_id}")
        return state

    state.tags = list(tags)
    state.tagging_error = tagging_error
    state.is_tagging = False
    logger.info(f"Tagging finished for {selection.name}: {len(state.tags)} tags")
    return state


def begin_generation(state: InteractionState) -> PendingGeneration | None:
    """Validate a generate request and mark it in flight.

    Args:
        state: Session state

    Returns:
        The pending generation, or None if validation failed (no remote call
        must be made in that case)
    """
    try:
        request = validate_edit_request(state.selection, state.instruction)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        state.error = str(e)
        return None

    state.generation_token += 1
    state.is_generating = True
    state.error = None
    state.result = None
    return PendingGeneration(token=state.generation_token, request=request)


async def run_generation(
    state: InteractionState, client, pending: PendingGeneration
) -> InteractionState:
    """Perform a validated generate request and record its outcome.

    Args:
        state: Session state
        client: Remote generation client (GeminiStudioClient)
        pending: Request returned by ``begin_generation``

    Returns:
        The updated state
    """
    selection = pending.request.selection
    result = None
    error = None

    try:
        encoded = await encode_selection(selection)
        edited = await client.edit_image(
            encoded, selection.mime_type, pending.request.instruction
        )
        result = to_data_url(edited)
    except ImageEditError as e:
        error = e.user_message
    except OSError as e:
        logger.error(f"Failed to read {selection.path}: {e}")
        error = READ_ERROR_MESSAGE
    except Exception as e:
        logger.error(f"Error generating image: {e}", exc_info=True)
        error = UNEXPECTED_ERROR_MESSAGE

    if pending.token != state.generation_token:
        logger.debug(f"Discarding superseded generation #{pending.token}")
        return state

    state.is_generating = False
    if not state.is_current(selection.selection_id):
        logger.debug("Discarding generation result for a replaced selection")
        return state

    state.result = result
    state.error = error
    if result is not None:
        logger.info(f"Generation #{pending.token} complete")
    return state


async def upload(
    state: InteractionState, client, path: str | Path, tagging: bool = True
) -> InteractionState:
    """Handle an upload and run its tagging sub-flow to completion."""
    selection_id = select_image(state, path, tagging=tagging)
    if selection_id is not None and tagging:
        await tag_selection(state, client, selection_id)
    return state


async def generate(state: InteractionState, client) -> InteractionState:
    """Validate and perform a generate request in a single awaited call."""
    pending = begin_generation(state)
    if pending is None:
        return state
    return await run_generation(state, client, pending)
