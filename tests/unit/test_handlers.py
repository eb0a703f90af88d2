"""Unit tests for Gradio event handlers."""

import asyncio
from unittest.mock import patch

import pytest

from photostudio.core.config import PhotoStudioConfig
from photostudio.ui.handlers import (
    generate_edit,
    render_workspace,
    tag_image,
    update_instruction,
    upload_image,
    use_example_prompt,
)
from photostudio.ui.models import EXAMPLE_PROMPTS, InteractionState

WORKSPACE_SIZE = 6 + len(EXAMPLE_PROMPTS)


async def _collect(agen) -> list:
    return [item async for item in agen]


@pytest.fixture
def patched_client(fake_client):
    """Route handler calls to the fake remote client."""
    with (
        patch("photostudio.ui.handlers.upload.get_studio_client", return_value=fake_client),
        patch("photostudio.ui.handlers.generation.get_studio_client", return_value=fake_client),
    ):
        yield fake_client


class TestRenderWorkspace:
    """Tests for render_workspace function."""

    def test_empty_state(self, ui_state):
        updates = render_workspace(ui_state)

        assert len(updates) == WORKSPACE_SIZE
        preview, instruction, generate_btn, error, tags, result = updates[:6]
        assert preview["value"] is None
        assert instruction["interactive"] is False
        assert generate_btn["interactive"] is False
        assert error == ""
        assert tags == ""
        assert "will appear here" in result
        assert all(update["interactive"] is False for update in updates[6:])

    def test_with_selection(self, ui_state, png_image):
        upload_image(str(png_image), ui_state)

        preview, instruction, *_ = render_workspace(ui_state)

        assert preview["value"] == str(png_image)
        assert instruction["interactive"] is True


class TestUploadImage:
    """Tests for upload_image handler."""

    def test_accepted_upload_requests_tagging(self, ui_state, png_image):
        outputs = upload_image(str(png_image), ui_state)

        assert len(outputs) == WORKSPACE_SIZE + 2
        pending_tag, state = outputs[-2:]
        assert state.selection.path == png_image
        assert pending_tag == state.selection.selection_id

    def test_rejected_upload_requests_no_tagging(self, ui_state, make_image):
        large = make_image("large.jpg", image_format="JPEG", size=5 * 1024 * 1024)

        outputs = upload_image(str(large), ui_state)

        pending_tag, state = outputs[-2:]
        assert pending_tag is None
        assert state.selection is None
        assert "4MB" in outputs[3]

    def test_tagging_disabled_in_config(self, ui_state, png_image):
        cfg = PhotoStudioConfig(api_key="test-key", enable_tagging=False, _env_file=None)
        with patch("photostudio.ui.handlers.upload.config", cfg):
            outputs = upload_image(str(png_image), ui_state)

        pending_tag, state = outputs[-2:]
        assert pending_tag is None
        assert state.is_tagging is False

    def test_cleared_upload_keeps_state(self, ui_state, png_image):
        upload_image(str(png_image), ui_state)
        selection = ui_state.selection

        outputs = upload_image(None, ui_state)

        assert outputs[-1].selection is selection

    def test_none_state_is_initialized(self, png_image):
        outputs = upload_image(str(png_image), None)
        assert isinstance(outputs[-1], InteractionState)


class TestTagImage:
    """Tests for tag_image handler."""

    def test_tags_current_selection(self, ui_state, png_image, patched_client):
        pending_tag = upload_image(str(png_image), ui_state)[-2]

        tags_markdown, state = asyncio.run(tag_image(pending_tag, ui_state))

        assert state.tags == ["shoes", "sneakers", "red"]
        assert tags_markdown == "**Tags:** `shoes` `sneakers` `red`"

    def test_nothing_to_tag(self, ui_state, patched_client):
        tags_markdown, state = asyncio.run(tag_image(None, ui_state))

        assert tags_markdown == ""
        patched_client.recognize_objects.assert_not_awaited()


class TestInstructionHandlers:
    """Tests for update_instruction and use_example_prompt handlers."""

    def test_update_instruction_enables_generate(self, ui_state, png_image):
        upload_image(str(png_image), ui_state)

        generate_btn, state = update_instruction("Remove the background", ui_state)

        assert state.instruction == "Remove the background"
        assert generate_btn["interactive"] is True

    def test_update_instruction_without_image(self, ui_state):
        generate_btn, state = update_instruction("Remove the background", ui_state)
        assert generate_btn["interactive"] is False

    def test_use_example_prompt(self, ui_state, png_image):
        upload_image(str(png_image), ui_state)

        instruction, generate_btn, state = use_example_prompt(EXAMPLE_PROMPTS[1], ui_state)

        assert instruction["value"] == EXAMPLE_PROMPTS[1]
        assert state.instruction == EXAMPLE_PROMPTS[1]
        assert generate_btn["interactive"] is True


class TestGenerateEdit:
    """Tests for generate_edit handler."""

    def test_yields_pending_then_result(self, ui_state, png_image, patched_client):
        upload_image(str(png_image), ui_state)
        update_instruction("Remove the background", ui_state)
        patched_client.edit_image.return_value = "QkJCQg=="

        views = asyncio.run(_collect(generate_edit(ui_state)))

        assert len(views) == 2
        pending_btn, _, pending_result, _ = views[0]
        assert pending_btn["value"] == "Generating..."
        assert pending_btn["interactive"] is False
        assert "working its magic" in pending_result

        final_btn, error, final_result, state = views[1]
        assert final_btn["interactive"] is True
        assert error == ""
        assert 'src="data:image/png;base64,QkJCQg=="' in final_result
        assert state.is_generating is False

    def test_validation_error_yields_once(self, ui_state, patched_client):
        views = asyncio.run(_collect(generate_edit(ui_state)))

        assert len(views) == 1
        _, error, _, state = views[0]
        assert "Please upload an image and enter a prompt." in error
        patched_client.edit_image.assert_not_awaited()
