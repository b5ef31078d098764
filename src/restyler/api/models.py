"""Pydantic request and response models for the Restyler API.

Images travel as base64 strings together with their MIME type; a
``data:<mime>;base64,`` prefix is accepted on input.

Models
------
TransformRequest
    Payload for ``POST /api/transform``.
PromptRequest
    Payload for ``POST /api/prompt/compile`` (prompt fields only).
BackgroundRemovalRequest
    Payload for ``POST /api/remove-background``.
ImageResponse
    Response of both image endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """Prompt composition parameters.

    Attributes:
        style_id: Identifier of the style from the catalog.
        influence: Reference influence, 0-100.  Defaults to 75.
        character_description: Optional character description.
        scene_description: Optional scene/action description.
        output_quality: ``"high"`` or ``"standard"``.  Any value other than
            ``"high"`` selects standard quality.
    """

    style_id: str = Field(
        ...,
        description="Style identifier (e.g. 'cyberpunk').",
    )
    influence: int = Field(
        default=75,
        ge=0,
        le=100,
        description="Reference influence, 0-100.",
    )
    character_description: str = Field(
        default="",
        description="Optional character description, embedded verbatim.",
    )
    scene_description: str = Field(
        default="",
        description="Optional scene and action description, embedded verbatim.",
    )
    output_quality: str = Field(
        default="standard",
        description="'high' (2K-4K) or 'standard' (720p).",
    )


class TransformRequest(PromptRequest):
    """Request body for ``POST /api/transform``.

    Attributes:
        image_data: Base64-encoded JPEG or PNG bytes.
        mime_type: ``image/jpeg`` or ``image/png``.
        filename: Optional original file name.
    """

    image_data: str = Field(
        ...,
        description="Base64-encoded image bytes.",
    )
    mime_type: str = Field(
        ...,
        description="MIME type of the image: image/jpeg or image/png.",
    )
    filename: str = Field(
        default="image",
        description="Original file name of the upload.",
    )


class BackgroundRemovalRequest(BaseModel):
    """Request body for ``POST /api/remove-background``."""

    image_data: str = Field(
        ...,
        description="Base64-encoded image bytes.",
    )
    mime_type: str = Field(
        ...,
        description="MIME type of the image: image/jpeg or image/png.",
    )
    filename: str = Field(
        default="image",
        description="Original file name of the upload.",
    )


class ImageResponse(BaseModel):
    """Generated image returned by the image endpoints.

    Attributes:
        image_data: Base64-encoded image bytes.
        mime_type: MIME type of the image (normally ``image/png``).
        data_url: Ready-to-display ``data:`` URL.
        filename: Suggested file name for the result.
        prompt: Instruction sent to the model (transform only).
    """

    image_data: str
    mime_type: str
    data_url: str
    filename: str
    prompt: str | None = None
