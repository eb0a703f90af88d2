"""Instruction editing and image generation handlers."""

import logging
from collections.abc import AsyncIterator

import gradio as gr

from ..formatting import format_error, format_generate_label, format_result_html
from ..models import InteractionState
from ..state import get_studio_client, initialize_interaction_state
from ..workflow import begin_generation, run_generation, set_instruction

logger = logging.getLogger(__name__)


def _generate_button(state: InteractionState) -> dict:
    return gr.update(value=format_generate_label(state), interactive=state.can_generate())


def _generation_view(state: InteractionState) -> tuple:
    return (
        _generate_button(state),
        format_error(state.error),
        format_result_html(state),
        state,
    )


def update_instruction(instruction: str, state: InteractionState) -> tuple[dict, InteractionState]:
    """Store instruction text typed by the user.

    Args:
        instruction: Current textbox value
        state: UI state

    Returns:
        Tuple of (generate_button_update, updated_state)
    """
    state = initialize_interaction_state(state)
    state = set_instruction(state, instruction)
    return _generate_button(state), state


def use_example_prompt(prompt: str, state: InteractionState) -> tuple[dict, dict, InteractionState]:
    """Fill the instruction with one of the example prompts.

    Args:
        prompt: Example prompt (the clicked button's label)
        state: UI state

    Returns:
        Tuple of (instruction_update, generate_button_update, updated_state)
    """
    state = initialize_interaction_state(state)
    state = set_instruction(state, prompt)
    return gr.update(value=state.instruction), _generate_button(state), state


async def generate_edit(state: InteractionState) -> AsyncIterator[tuple]:
    """Edit the selected image with the current instruction.

    Yields the in-progress view first, then the final view once the remote
    call has resolved.

    Args:
        state: UI state

    Yields:
        Tuple of (generate_button_update, error_markdown, result_html, updated_state)
    """
    state = initialize_interaction_state(state)

    pending = begin_generation(state)
    if pending is None:
        yield _generation_view(state)
        return

    logger.info(f"Generating edit #{pending.token}: {pending.request.instruction!r}")
    yield _generation_view(state)

    state = await run_generation(state, get_studio_client(), pending)
    yield _generation_view(state)
