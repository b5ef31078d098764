"""Client for the hosted image-generation model.

This module provides :class:`GenerationClient`, the single point of contact
with the remote model. Both operations the application needs share one
request/response shape:

    (image + instruction)  ->  model  ->  ordered list of response parts

and differ only in the instruction text:

- **transform_image** sends the composed style instruction.
- **remove_background** sends a fixed background-removal instruction.

The client takes the *first* part that carries inline image bytes. A
response without such a part raises :class:`NoImageInResponse`; anything the
transport raises is logged and re-raised as :class:`GenerationFailed`.

Transports
----------
The client talks to the model through a transport object with a single
``send(request) -> list[ResponsePart]`` method. :class:`GeminiTransport` is
the real implementation (``google-genai`` SDK); tests inject a fake that
returns canned parts.

Usage
-----
::

    from restyler.core.config import config
    from restyler.core.generation_client import GenerationClient

    client = GenerationClient.from_config(config)
    result = client.transform_image(image, prompt)
    no_bg = client.remove_background(image)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from .config import RestylerConfig
from .errors import (
    REMOVE_BACKGROUND,
    TRANSFORM,
    GenerationFailed,
    NoImageInResponse,
)
from .images import PNG_MIME_TYPE, GenerationResult, SourceImage

logger = logging.getLogger(__name__)

IMAGE_MODALITY = "IMAGE"

REMOVE_BACKGROUND_INSTRUCTION = (
    "Remove the background from the image, making it transparent. The main subject "
    "should be perfectly preserved. Output a PNG with a transparent background."
)


@dataclass(frozen=True)
class GenerationRequest:
    """One round trip to the model: an image plus an instruction."""

    image: SourceImage
    prompt: str
    response_modalities: tuple[str, ...] = (IMAGE_MODALITY,)


@dataclass(frozen=True)
class ResponsePart:
    """One fragment of a model response, either inline image data or text."""

    data: bytes | None = None
    mime_type: str | None = None
    text: str | None = None

    @property
    def has_image(self) -> bool:
        """True when the part carries inline image bytes."""
        return bool(self.data)


class Transport(Protocol):
    """Anything that can deliver a request to the model."""

    def send(self, request: GenerationRequest) -> Sequence[ResponsePart]:
        """Send the request and return the ordered response parts."""
        ...


class GeminiTransport:
    """Transport backed by the ``google-genai`` SDK.

    The SDK client is created lazily on the first request.

    Attributes:
        model_name: Gemini model identifier
    """

    def __init__(self, api_key: str, model_name: str) -> None:
        self._api_key = api_key
        self.model_name = model_name
        self._client = None

    def _get_client(self):
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self._api_key)
            logger.info(f"Created Gemini client for model {self.model_name}")
        return self._client

    def send(self, request: GenerationRequest) -> list[ResponsePart]:
        """Call ``generate_content`` with the image and instruction.

        Args:
            request: Image and instruction to send

        Returns:
            Normalized response parts of the first candidate (empty if the
            model returned no candidate or no content)
        """
        from google.genai import types

        client = self._get_client()
        response = client.models.generate_content(
            model=self.model_name,
            contents=[
                types.Part.from_bytes(data=request.image.data, mime_type=request.image.mime_type),
                request.prompt,
            ],
            config=types.GenerateContentConfig(
                response_modalities=list(request.response_modalities),
            ),
        )
        return _parts_from_response(response)


def _parts_from_response(response: Any) -> list[ResponsePart]:
    """Flatten a ``GenerateContentResponse`` into :class:`ResponsePart` objects."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    content = getattr(candidates[0], "content", None)
    raw_parts = getattr(content, "parts", None) or []

    parts = []
    for part in raw_parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            parts.append(ResponsePart(data=inline.data, mime_type=inline.mime_type))
        else:
            parts.append(ResponsePart(text=getattr(part, "text", None)))
    return parts


def first_image_part(parts: Sequence[ResponsePart]) -> ResponsePart | None:
    """Return the first part carrying image bytes, or None."""
    return next((part for part in parts if part.has_image), None)


class GenerationClient:
    """Runs transform and background-removal requests against the model.

    The client holds no per-request state; callers are responsible for not
    overlapping calls against the same image (see
    :class:`~restyler.core.request_state.RequestTracker`).
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @classmethod
    def from_config(cls, config: RestylerConfig) -> GenerationClient:
        """Build a client on a :class:`GeminiTransport`.

        Raises:
            ConfigurationMissing: If the API key is not configured
        """
        transport = GeminiTransport(api_key=config.require_api_key(), model_name=config.model_name)
        return cls(transport)

    def transform_image(self, image: SourceImage, composed_prompt: str) -> GenerationResult:
        """Re-style an image with a composed instruction.

        Raises:
            NoImageInResponse: If the model returned no image part
            GenerationFailed: If the remote call failed
        """
        return self._generate(image, composed_prompt, operation=TRANSFORM)

    def remove_background(self, image: SourceImage) -> GenerationResult:
        """Remove the background of an image, keeping the subject.

        Raises:
            NoImageInResponse: If the model returned no image part
            GenerationFailed: If the remote call failed
        """
        return self._generate(image, REMOVE_BACKGROUND_INSTRUCTION, operation=REMOVE_BACKGROUND)

    def _generate(self, image: SourceImage, prompt: str, operation: str) -> GenerationResult:
        request = GenerationRequest(image=image, prompt=prompt)
        logger.info(
            "Sending %s request (%s, %d bytes, prompt %d chars).",
            operation,
            image.mime_type,
            len(image.data),
            len(prompt),
        )

        try:
            parts = self._transport.send(request)
        except Exception as e:
            logger.exception("Remote %s call failed.", operation)
            raise GenerationFailed(f"{operation} request failed: {e}", operation=operation) from e

        part = first_image_part(parts)
        if part is None:
            texts = [p.text for p in parts if p.text]
            logger.error(
                "No image data in %s response (%d parts, text: %r).",
                operation,
                len(parts),
                texts,
            )
            raise NoImageInResponse(
                f"No image data found in the {operation} response.", operation=operation
            )

        logger.info("Received %s result (%d bytes).", operation, len(part.data))
        return GenerationResult(data=part.data, mime_type=part.mime_type or PNG_MIME_TYPE)
