"""Gradio UI for PhotoStudio."""

import logging

import gradio as gr

from photostudio.core.config import config
from photostudio.core.errors import MissingCredentialError

from .formatting import RESULT_PLACEHOLDER
from .handlers import generate_edit, tag_image, update_instruction, upload_image, use_example_prompt
from .models import ALLOWED_EXTENSIONS, EXAMPLE_PROMPTS, MAX_UPLOAD_LABEL, InteractionState
from .state import initialize_studio_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CUSTOM_CSS = """
.result-panel {
    min-height: 320px;
    display: flex;
    flex-direction: column;
    justify-content: center;
    align-items: center;
    gap: 12px;
    border: 1px solid #374151;
    border-radius: 12px;
}
.result-status {
    color: #94a3b8;
}
.result-image {
    max-width: 100%;
    max-height: 320px;
    object-fit: contain;
    border-radius: 8px;
}
"""


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    app = gr.Blocks(title="AI Photo Studio")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(InteractionState())
        # Selection id handed from the upload step to the tagging step
        pending_tag = gr.State(None)

        gr.Markdown(
            """
            # AI Photo Studio
            ### Clean up your product photos with simple text instructions.
            """
        )

        with gr.Row():
            # Left panel: upload and original image
            with gr.Column(scale=1):
                upload_input = gr.File(
                    label=f"Upload an image (PNG, JPG, or WEBP, max {MAX_UPLOAD_LABEL})",
                    file_types=ALLOWED_EXTENSIONS,
                    file_count="single",
                    type="filepath",
                )
                preview = gr.Image(
                    label="Original",
                    type="filepath",
                    interactive=False,
                    height=320,
                )
                tags_output = gr.Markdown(value="")

            # Right panel: instruction and result
            with gr.Column(scale=1):
                instruction_input = gr.Textbox(
                    label="Your instruction:",
                    placeholder="e.g., 'Remove the background and add a soft shadow'",
                    lines=4,
                    interactive=False,
                )
                with gr.Row():
                    example_buttons = [
                        gr.Button(value=prompt, size="sm", interactive=False)
                        for prompt in EXAMPLE_PROMPTS
                    ]

                generate_btn = gr.Button("✨ Generate", variant="primary", interactive=False)
                error_output = gr.Markdown(value="")
                result_output = gr.HTML(
                    value=f'<div class="result-panel result-status">{RESULT_PLACEHOLDER}</div>'
                )

        gr.Markdown(f"*Powered by {config.edit_model}*")

        workspace_outputs = [
            preview,
            instruction_input,
            generate_btn,
            error_output,
            tags_output,
            result_output,
            *example_buttons,
        ]

        # Upload, then tag the accepted image independently of generation.
        # Remote-call listeners run without a per-event concurrency limit
        upload_input.upload(
            fn=upload_image,
            inputs=[upload_input, ui_state],
            outputs=[*workspace_outputs, pending_tag, ui_state],
        ).then(
            fn=tag_image,
            inputs=[pending_tag, ui_state],
            outputs=[tags_output, ui_state],
            concurrency_limit=None,
        )

        instruction_input.input(
            fn=update_instruction,
            inputs=[instruction_input, ui_state],
            outputs=[generate_btn, ui_state],
        )

        for button in example_buttons:
            button.click(
                fn=use_example_prompt,
                inputs=[button, ui_state],
                outputs=[instruction_input, generate_btn, ui_state],
            )

        generate_btn.click(
            fn=generate_edit,
            inputs=[ui_state],
            outputs=[generate_btn, error_output, result_output, ui_state],
            concurrency_limit=None,
        )

    return app, CUSTOM_CSS


def main():
    """Main entry point for the application."""
    logger.info("Starting AI Photo Studio...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")

    try:
        initialize_studio_client(config)
    except MissingCredentialError as e:
        logger.critical(f"Cannot start: {e}")
        raise SystemExit(1) from e

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
