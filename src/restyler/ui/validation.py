"""Validation utilities for Restyler UI inputs.

All failures raise :class:`~restyler.core.errors.InvalidInput`, whose
message is displayed directly to the user.
"""

import logging

from restyler.core.errors import InvalidInput
from restyler.core.images import SourceImage
from restyler.core.styles import StyleOption, get_style

from .models import (
    INFLUENCE_MAX,
    INFLUENCE_MIN,
    INVALID_STYLE_MESSAGE,
    MISSING_IMAGE_MESSAGE,
    MISSING_INPUT_MESSAGE,
)

logger = logging.getLogger(__name__)


def validate_upload(path: str | None) -> SourceImage:
    """Load and validate an uploaded file.

    Args:
        path: Temporary file path provided by the upload widget

    Returns:
        The uploaded image

    Raises:
        InvalidInput: If no file was given or it is not a JPEG/PNG image
    """
    if not path:
        raise InvalidInput(MISSING_IMAGE_MESSAGE)
    return SourceImage.from_path(path)


def validate_style_selection(image: SourceImage | None, style_id: str | None) -> StyleOption:
    """Ensure an image is loaded and a known style is selected.

    Raises:
        InvalidInput: If either is missing, or the style id is unknown
    """
    if image is None or not style_id:
        raise InvalidInput(MISSING_INPUT_MESSAGE)
    try:
        return get_style(style_id)
    except KeyError as e:
        logger.warning(f"Unknown style requested: {style_id}")
        raise InvalidInput(INVALID_STYLE_MESSAGE) from e


def validate_influence(influence: float | int | None) -> int:
    """Coerce the slider value to an int in 0-100.

    Raises:
        InvalidInput: If the value is missing or out of range
    """
    if influence is None:
        raise InvalidInput("Reference influence is required.")
    value = int(round(influence))
    if value < INFLUENCE_MIN or value > INFLUENCE_MAX:
        raise InvalidInput(
            f"Reference influence must be {INFLUENCE_MIN}-{INFLUENCE_MAX}, got {value}"
        )
    return value
