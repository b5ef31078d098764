"""Upload handler."""

import logging

import gradio as gr
from PIL import Image

from restyler.core.errors import InvalidInput

from ..models import UIState
from ..validation import validate_upload
from .generation import format_busy, format_error

logger = logging.getLogger(__name__)


def upload_image(
    path: str | None, state: UIState
) -> tuple[Image.Image | None, Image.Image | None, str, UIState]:
    """Make an uploaded file the current image.

    A valid upload replaces the current image and clears the previous
    result. An invalid one leaves the state untouched and shows the
    validation message.

    Args:
        path: Temporary path of the uploaded file (None when cleared)
        state: UI state

    Returns:
        Tuple of (current_image_preview, result_image, status_markdown, updated_state)
    """
    if state is None:
        state = UIState()

    if not path:
        return gr.update(), gr.update(), "", state

    if state.request.is_busy:
        busy = format_busy("Wait for the current request to finish.")
        return gr.update(), gr.update(), busy, state

    try:
        image = validate_upload(path)
    except InvalidInput as e:
        logger.warning(f"Upload rejected: {e}")
        return gr.update(), gr.update(), format_error(str(e)), state

    state.replace_current_image(image)
    state.generated_image = None
    state.request.reset()
    return image.to_pil(), None, f"📷 **Loaded** {image.filename}", state
