"""Image upload and tagging handlers."""

import logging

import gradio as gr

from photostudio.core.config import config

from ..formatting import format_error, format_generate_label, format_result_html, format_tags
from ..models import EXAMPLE_PROMPTS, InteractionState
from ..state import get_studio_client, initialize_interaction_state
from ..workflow import select_image, tag_selection

logger = logging.getLogger(__name__)


def render_workspace(state: InteractionState) -> tuple:
    """Build updates for every component that depends on the selection.

    Args:
        state: Session state

    Returns:
        Tuple of (preview, instruction, generate_button, error, tags, result,
        *example_buttons)
    """
    has_image = state.selection is not None
    preview = str(state.selection.path) if has_image else None

    return (
        gr.update(value=preview),
        gr.update(value=state.instruction, interactive=has_image),
        gr.update(value=format_generate_label(state), interactive=state.can_generate()),
        format_error(state.error),
        format_tags(state),
        format_result_html(state),
        *(gr.update(interactive=has_image) for _ in EXAMPLE_PROMPTS),
    )


def upload_image(file_path: str | None, state: InteractionState) -> tuple:
    """Handle a file uploaded through the upload control.

    Args:
        file_path: Path of the uploaded file (None when the control is cleared)
        state: UI state

    Returns:
        Tuple of (*workspace_updates, selection_id_to_tag, updated_state).
        ``selection_id_to_tag`` is None when no tagging should follow.
    """
    state = initialize_interaction_state(state)

    if not file_path:
        return (*render_workspace(state), None, state)

    selection_id = select_image(state, file_path, tagging=config.enable_tagging)
    pending_tag = selection_id if config.enable_tagging else None

    return (*render_workspace(state), pending_tag, state)


async def tag_image(selection_id: str | None, state: InteractionState) -> tuple[str, InteractionState]:
    """Run the tagging sub-flow after an accepted upload.

    Args:
        selection_id: Selection returned by ``upload_image``, or None
        state: UI state

    Returns:
        Tuple of (tags_markdown, updated_state)
    """
    state = initialize_interaction_state(state)

    if selection_id:
        state = await tag_selection(state, get_studio_client(), selection_id)

    return format_tags(state), state
