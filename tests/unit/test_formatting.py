"""Unit tests for UI formatting utilities."""

from pathlib import Path

from photostudio.ui.formatting import (
    RESULT_LOADING,
    RESULT_PLACEHOLDER,
    TAGS_LOADING,
    format_error,
    format_generate_label,
    format_result_html,
    format_tags,
)
from photostudio.ui.models import ImageSelection, InteractionState


class TestFormatError:
    """Tests for format_error function."""

    def test_no_error(self):
        assert format_error(None) == ""
        assert format_error("") == ""

    def test_error_message(self):
        assert format_error("Image size exceeds 4MB.") == "❌ Image size exceeds 4MB."


class TestFormatTags:
    """Tests for format_tags function."""

    def test_pending(self):
        state = InteractionState(is_tagging=True, tags=["ignored"])
        assert format_tags(state) == TAGS_LOADING

    def test_error(self):
        state = InteractionState(tagging_error="Failed to recognize objects in the image.")
        assert format_tags(state) == "⚠️ Failed to recognize objects in the image."

    def test_empty(self):
        assert format_tags(InteractionState()) == ""

    def test_tags_in_order(self):
        state = InteractionState(tags=["shoes", "sneakers", "red"])
        assert format_tags(state) == "**Tags:** `shoes` `sneakers` `red`"

    def test_backticks_removed(self):
        state = InteractionState(tags=["`quoted`"])
        assert format_tags(state) == "**Tags:** `quoted`"


class TestFormatResultHtml:
    """Tests for format_result_html function."""

    def test_placeholder(self):
        assert RESULT_PLACEHOLDER in format_result_html(InteractionState())

    def test_loading(self):
        state = InteractionState(is_generating=True, result="data:image/png;base64,QUJD")
        html = format_result_html(state)
        assert RESULT_LOADING in html
        assert "<img" not in html

    def test_result_rendered_and_downloadable(self):
        state = InteractionState(result="data:image/png;base64,QUJD")
        html = format_result_html(state)

        assert '<img src="data:image/png;base64,QUJD"' in html
        assert 'href="data:image/png;base64,QUJD"' in html
        assert 'download="edited-image.png"' in html


class TestFormatGenerateLabel:
    """Tests for format_generate_label function."""

    def test_idle(self):
        assert "Generate" in format_generate_label(InteractionState())

    def test_generating(self):
        state = InteractionState(
            selection=ImageSelection(path=Path("a.png"), mime_type="image/png", size=1),
            is_generating=True,
        )
        assert format_generate_label(state) == "Generating..."
