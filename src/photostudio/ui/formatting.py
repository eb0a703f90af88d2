"""Formatting utilities that turn interaction state into display values."""

import html

from .models import DOWNLOAD_FILENAME, InteractionState

RESULT_PLACEHOLDER = "Your edited image will appear here"
RESULT_LOADING = "AI is working its magic..."
TAGS_LOADING = "*Analyzing image...*"


def format_error(message: str | None) -> str:
    """Format an error message for a Markdown component."""
    if not message:
        return ""
    return f"❌ {message}"


def format_tags(state: InteractionState) -> str:
    """Format the tag set (or its pending/error status) as Markdown.

    Args:
        state: Session state

    Returns:
        Markdown string, empty when there is nothing to show
    """
    if state.is_tagging:
        return TAGS_LOADING
    if state.tagging_error:
        return f"⚠️ {state.tagging_error}"
    if not state.tags:
        return ""
    # Backticks would break the inline code spans
    return "**Tags:** " + " ".join(f"`{tag.replace('`', '')}`" for tag in state.tags)


def format_result_html(state: InteractionState) -> str:
    """Render the generated image panel.

    The generated image is shown inline and offered as a download.

    Args:
        state: Session state

    Returns:
        HTML fragment for the result panel
    """
    if state.is_generating:
        return f'<div class="result-panel result-status">{RESULT_LOADING}</div>'

    if not state.result:
        return f'<div class="result-panel result-status">{RESULT_PLACEHOLDER}</div>'

    src = html.escape(state.result, quote=True)
    return (
        '<div class="result-panel">'
        f'<img src="{src}" alt="Edited" class="result-image"/>'
        f'<a href="{src}" download="{DOWNLOAD_FILENAME}" class="result-download">'
        "Download image</a>"
        "</div>"
    )


def format_generate_label(state: InteractionState) -> str:
    """Label for the generate button."""
    return "Generating..." if state.is_generating else "✨ Generate"
