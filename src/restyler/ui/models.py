"""Data models for Restyler UI state and form options."""

import logging
from dataclasses import dataclass, field
from typing import Any

from restyler.core.images import GenerationResult, SourceImage
from restyler.core.request_state import RequestTracker

logger = logging.getLogger(__name__)


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each user gets their own UIState instance, so the "current image" and
    the request tracker are per session.

    Attributes
    ----------
    client : Any | None
        GenerationClient instance (created lazily)
    current_image : SourceImage | None
        The photo the next request will be made against
    generated_image : GenerationResult | None
        Result of the last successful transform
    request : RequestTracker
        Status of the session's remote call
    """

    client: Any | None = None  # GenerationClient instance
    current_image: SourceImage | None = None
    generated_image: GenerationResult | None = None
    request: RequestTracker = field(default_factory=RequestTracker)

    def is_initialized(self) -> bool:
        """Check if the generation client has been attached.

        Returns:
            True if the client is available
        """
        return self.client is not None

    def replace_current_image(self, image: SourceImage) -> None:
        """Swap in a new current image.

        The previous SourceImage is dropped, never modified.
        """
        logger.info(f"Current image replaced: {image.filename} ({image.mime_type})")
        self.current_image = image

    def __repr__(self) -> str:
        """String representation for debugging."""
        image = self.current_image.filename if self.current_image else None
        return (
            f"UIState(initialized={self.is_initialized()}, "
            f"image={image}, "
            f"request={self.request.status.value})"
        )


# Form options
QUALITY_OPTIONS = [
    ("Standard (720p)", "standard"),
    ("High (2K–4K)", "high"),
]

INFLUENCE_MIN = 0
INFLUENCE_MAX = 100

# User-facing messages
MISSING_IMAGE_MESSAGE = "Please upload an image first."
MISSING_INPUT_MESSAGE = "Please upload an image and select a style."
INVALID_STYLE_MESSAGE = "Invalid style selected."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Check logs for details."
