"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events, organized into logical modules:
- upload: Image upload and the tagging sub-flow
- generation: Instruction editing and image generation
"""

from .generation import (
    generate_edit,
    update_instruction,
    use_example_prompt,
)
from .upload import (
    render_workspace,
    tag_image,
    upload_image,
)

__all__ = [
    # Upload handlers
    "render_workspace",
    "tag_image",
    "upload_image",
    # Generation handlers
    "generate_edit",
    "update_instruction",
    "use_example_prompt",
]
