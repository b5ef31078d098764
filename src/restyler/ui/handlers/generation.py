"""Style transform and background removal handlers."""

import logging

import gradio as gr
from PIL import Image, UnidentifiedImageError

from restyler.core.errors import (
    REMOVE_BACKGROUND,
    TRANSFORM,
    InvalidInput,
    RemoteCallError,
    RequestInFlight,
    failure_message,
)
from restyler.core.prompt_composer import compose_prompt

from ..models import MISSING_IMAGE_MESSAGE, UNEXPECTED_ERROR_MESSAGE, UIState
from ..state import initialize_ui_state
from ..validation import validate_influence, validate_style_selection

logger = logging.getLogger(__name__)


def format_error(message: str) -> str:
    """Render an error for the status panel."""
    return f"❌ **Error**\n\n{message}"


def format_busy(message: str) -> str:
    """Render a request-in-progress notice for the status panel."""
    return f"⏳ **Please wait**\n\n{message}"


def generate_image(
    style_id: str | None,
    influence: float,
    character_description: str,
    scene_description: str,
    output_quality: str,
    state: UIState,
) -> tuple[Image.Image | None, str, UIState]:
    """Re-style the current image with the selected style and form values.

    Args:
        style_id: Selected style id (None if nothing selected)
        influence: Reference influence slider value (0-100)
        character_description: Optional character description
        scene_description: Optional scene/action description
        output_quality: "standard" or "high"
        state: UI state

    Returns:
        Tuple of (result_image, status_markdown, updated_state)
    """
    state = initialize_ui_state(state)

    try:
        style = validate_style_selection(state.current_image, style_id)
        influence_value = validate_influence(influence)
    except InvalidInput as e:
        logger.warning(f"Validation error: {e}")
        return None, format_error(str(e)), state

    try:
        state.request.begin(TRANSFORM)
    except RequestInFlight as e:
        return gr.update(), format_busy(str(e)), state

    state.generated_image = None
    prompt = compose_prompt(
        style.prompt_template,
        influence_value,
        character_description or "",
        scene_description or "",
        output_quality,
    )
    logger.info(f"Transforming {state.current_image.filename} with style '{style.id}'")

    try:
        result = state.client.transform_image(state.current_image, prompt)
        preview = result.to_pil()
    except RemoteCallError as e:
        logger.error(f"Transform failed: {e}")
        state.request.fail(e.user_message)
        return None, format_error(e.user_message), state
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Transform returned an unreadable image: {e}", exc_info=True)
        message = failure_message(TRANSFORM)
        state.request.fail(message)
        return None, format_error(message), state
    except Exception as e:
        logger.error(f"Unexpected error during transform: {e}", exc_info=True)
        state.request.fail(UNEXPECTED_ERROR_MESSAGE)
        return None, format_error(UNEXPECTED_ERROR_MESSAGE), state

    state.generated_image = result
    state.request.succeed()

    info = f"""
✅ **Generation Complete!**

**Style:** {style.name}
**Reference Influence:** {influence_value}%
**Quality:** {output_quality}
    """
    return preview, info.strip(), state


def remove_background(state: UIState) -> tuple[Image.Image | None, str, UIState]:
    """Replace the current image with a background-free version.

    The current image is only replaced when the call succeeds; on failure
    the previous image stays current.

    Args:
        state: UI state

    Returns:
        Tuple of (current_image_preview, status_markdown, updated_state)
    """
    state = initialize_ui_state(state)

    if state.current_image is None:
        return None, format_error(MISSING_IMAGE_MESSAGE), state

    try:
        state.request.begin(REMOVE_BACKGROUND)
    except RequestInFlight as e:
        return gr.update(), format_busy(str(e)), state

    source = state.current_image
    try:
        result = state.client.remove_background(source)
        new_image = result.as_source_image(f"bg_removed_{source.filename}")
        preview = new_image.to_pil()
    except RemoteCallError as e:
        logger.error(f"Background removal failed: {e}")
        state.request.fail(e.user_message)
        return source.to_pil(), format_error(e.user_message), state
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Background removal returned an unreadable image: {e}", exc_info=True)
        message = failure_message(REMOVE_BACKGROUND)
        state.request.fail(message)
        return source.to_pil(), format_error(message), state
    except Exception as e:
        logger.error(f"Unexpected error during background removal: {e}", exc_info=True)
        state.request.fail(UNEXPECTED_ERROR_MESSAGE)
        return source.to_pil(), format_error(UNEXPECTED_ERROR_MESSAGE), state

    # Only a decoded result may become the current image
    state.replace_current_image(new_image)
    state.request.succeed()
    return preview, "✅ **Background removed**", state


def lock_actions() -> tuple[dict, dict]:
    """Disable both action buttons while a call is in flight.

    Returns:
        Tuple of (remove_background_button_update, generate_button_update)
    """
    return gr.update(interactive=False), gr.update(interactive=False)


def unlock_actions(style_id: str | None, state: UIState) -> tuple[dict, dict]:
    """Re-enable the action buttons that the current state allows.

    Background removal needs an image; generation needs an image and a style.

    Args:
        style_id: Selected style id
        state: UI state

    Returns:
        Tuple of (remove_background_button_update, generate_button_update)
    """
    idle = state is not None and not state.request.is_busy
    has_image = state is not None and state.current_image is not None
    return (
        gr.update(interactive=idle and has_image),
        gr.update(interactive=idle and has_image and bool(style_id)),
    )
