"""Gradio UI for Restyler."""

import logging

import gradio as gr

from restyler.core.config import config
from restyler.core.styles import style_choices

from .handlers import (
    generate_image,
    lock_actions,
    remove_background,
    unlock_actions,
    upload_image,
)
from .models import INFLUENCE_MAX, INFLUENCE_MIN, QUALITY_OPTIONS, UIState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="AI Image Style Transformer")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # AI Image Style Transformer
            ### Powered by Gemini
            """
        )

        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### 1. Upload Your Image")
                upload_input = gr.File(
                    label="Select Image",
                    file_types=[".jpg", ".jpeg", ".png"],
                    type="filepath",
                )
                current_preview = gr.Image(
                    label="Current Image",
                    type="pil",
                    interactive=False,
                    height=320,
                )

                gr.Markdown("### 2. Choose a Style")
                style_dropdown = gr.Dropdown(
                    label="Style",
                    choices=style_choices(),
                    value=None,
                    info="Select a style...",
                )

                influence_slider = gr.Slider(
                    minimum=INFLUENCE_MIN,
                    maximum=INFLUENCE_MAX,
                    step=1,
                    value=config.default_influence,
                    label="Reference Influence (%)",
                )

                character_input = gr.Textbox(
                    label="Description for Character",
                    placeholder="e.g., a young red-haired warrior...",
                    lines=2,
                )
                scene_input = gr.Textbox(
                    label="Scene & Action",
                    placeholder="e.g., standing in a forest, fighting a dragon...",
                    lines=2,
                )

                quality_radio = gr.Radio(
                    label="Output Quality",
                    choices=QUALITY_OPTIONS,
                    value=config.default_quality,
                )

                remove_bg_btn = gr.Button("Background Removal", interactive=False)
                generate_btn = gr.Button(
                    "Generate Image",
                    variant="primary",
                    size="lg",
                    interactive=False,
                )

            with gr.Column(scale=1):
                gr.Markdown("### Result")
                result_image = gr.Image(
                    label="Generated Image",
                    type="pil",
                    format="png",
                    interactive=False,
                    height=512,
                )
                status_output = gr.Markdown(value="*Generated image will appear here*")

        action_buttons = [remove_bg_btn, generate_btn]

        # Event handlers
        upload_input.change(
            fn=upload_image,
            inputs=[upload_input, ui_state],
            outputs=[current_preview, result_image, status_output, ui_state],
        ).then(
            fn=unlock_actions,
            inputs=[style_dropdown, ui_state],
            outputs=action_buttons,
        )

        style_dropdown.change(
            fn=unlock_actions,
            inputs=[style_dropdown, ui_state],
            outputs=action_buttons,
        )

        # Buttons are disabled for the duration of the remote call
        remove_bg_btn.click(
            fn=lock_actions,
            outputs=action_buttons,
        ).then(
            fn=remove_background,
            inputs=[ui_state],
            outputs=[current_preview, status_output, ui_state],
        ).then(
            fn=unlock_actions,
            inputs=[style_dropdown, ui_state],
            outputs=action_buttons,
        )

        generate_btn.click(
            fn=lock_actions,
            outputs=action_buttons,
        ).then(
            fn=generate_image,
            inputs=[
                style_dropdown,
                influence_slider,
                character_input,
                scene_input,
                quality_radio,
                ui_state,
            ],
            outputs=[result_image, status_output, ui_state],
        ).then(
            fn=unlock_actions,
            inputs=[style_dropdown, ui_state],
            outputs=action_buttons,
        )

        gr.Markdown(f"---\n**Model:** {config.model_name}")

    return app


def main():
    """Main entry point for the application."""
    logger.info("Starting Restyler...")

    # Fails fast when the API key is missing
    config.require_api_key()
    logger.info(f"Configuration: {config!r}")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
