"""Image payloads exchanged with the generation model.

:class:`SourceImage` is the photo a request is made against. It is immutable:
every operation that produces a new photo (an upload, a background removal)
creates a new instance instead of changing the current one.

:class:`GenerationResult` is the image returned by the model. It can be
exported as base64 / a data URL, or converted into a new
:class:`SourceImage` so that results can be chained.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import InvalidInput

logger = logging.getLogger(__name__)

JPEG_MIME_TYPE = "image/jpeg"
PNG_MIME_TYPE = "image/png"
ALLOWED_MIME_TYPES = (JPEG_MIME_TYPE, PNG_MIME_TYPE)

# Pillow format name -> MIME type for the accepted upload formats.
_PIL_FORMATS = {
    "JPEG": JPEG_MIME_TYPE,
    "PNG": PNG_MIME_TYPE,
}

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Please upload a JPG or PNG file."


def validate_mime_type(mime_type: str | None) -> str:
    """Check that a MIME type is one of the accepted upload types.

    Args:
        mime_type: Declared MIME type of the upload

    Returns:
        The normalized (lower-case) MIME type

    Raises:
        InvalidInput: If the type is not ``image/jpeg`` or ``image/png``
    """
    normalized = (mime_type or "").strip().lower()
    if normalized == "image/jpg":
        normalized = JPEG_MIME_TYPE
    if normalized not in ALLOWED_MIME_TYPES:
        logger.warning(f"Rejected upload with MIME type: {mime_type!r}")
        raise InvalidInput(INVALID_FILE_TYPE_MESSAGE)
    return normalized


@dataclass(frozen=True)
class SourceImage:
    """An uploaded (or previously generated) photo.

    Attributes:
        data: Raw encoded image bytes
        mime_type: ``image/jpeg`` or ``image/png``
        filename: Display name, used to derive names of chained results
    """

    data: bytes
    mime_type: str
    filename: str = "image"

    def __post_init__(self) -> None:
        validate_mime_type(self.mime_type)
        if not self.data:
            raise InvalidInput("The uploaded image is empty.")

    @classmethod
    def from_path(cls, path: str | Path) -> SourceImage:
        """Load an upload from disk, detecting its type from the content.

        Args:
            path: Path of the uploaded file

        Returns:
            A new SourceImage

        Raises:
            InvalidInput: If the file is not a readable JPEG or PNG image
        """
        path = Path(path)
        try:
            with Image.open(path) as img:
                image_format = img.format
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not read upload {path.name}: {e}")
            raise InvalidInput(INVALID_FILE_TYPE_MESSAGE) from e

        mime_type = _PIL_FORMATS.get(image_format or "")
        if mime_type is None:
            logger.warning(f"Rejected upload {path.name} with format {image_format}")
            raise InvalidInput(INVALID_FILE_TYPE_MESSAGE)

        return cls(data=path.read_bytes(), mime_type=mime_type, filename=path.name)

    @classmethod
    def from_base64(cls, data: str, mime_type: str, filename: str = "image") -> SourceImage:
        """Decode a base64 upload.

        A ``data:<mime>;base64,`` prefix is accepted and stripped.

        Raises:
            InvalidInput: If the MIME type is not accepted or the payload is not base64
        """
        mime_type = validate_mime_type(mime_type)
        if data.startswith("data:") and "," in data:
            data = data.split(",", 1)[1]
        try:
            raw = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidInput("Image data is not valid base64.") from e
        return cls(data=raw, mime_type=mime_type, filename=filename)

    def to_base64(self) -> str:
        """Return the image bytes as a base64 string."""
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Return a ``data:`` URL suitable for an ``<img>`` tag."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    def to_pil(self) -> Image.Image:
        """Decode into a PIL image for display."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image


@dataclass(frozen=True)
class GenerationResult:
    """Image bytes returned by the generation model.

    Attributes:
        data: Raw encoded image bytes (PNG unless the model says otherwise)
        mime_type: MIME type reported by the model
    """

    data: bytes
    mime_type: str = PNG_MIME_TYPE

    def to_base64(self) -> str:
        """Return the image bytes as a base64 string."""
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Return a ``data:`` URL suitable for an ``<img>`` tag."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    def to_pil(self) -> Image.Image:
        """Decode into a PIL image for display."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def as_source_image(self, filename: str) -> SourceImage:
        """Turn this result into the next source image.

        JPEG and PNG results are kept as they are. Any other format is
        re-encoded to PNG, which is what the model is asked to produce, so
        the bytes always match the declared type.

        Raises:
            UnidentifiedImageError: If a result needing re-encoding cannot be decoded
        """
        if self.mime_type in ALLOWED_MIME_TYPES:
            return SourceImage(data=self.data, mime_type=self.mime_type, filename=filename)

        logger.info(f"Re-encoding {self.mime_type} result as PNG")
        buffer = io.BytesIO()
        self.to_pil().save(buffer, format="PNG")
        return SourceImage(data=buffer.getvalue(), mime_type=PNG_MIME_TYPE, filename=filename)
