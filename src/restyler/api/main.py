"""Restyler — FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST API routes, and
the ``main()`` CLI function that launches the uvicorn server.

The API is stateless: every request carries its own image, so there is no
"current image" on the server side.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/config``               Styles, quality options, defaults
POST      ``/api/prompt/compile``       Preview the composed instruction
POST      ``/api/transform``            Re-style an image
POST      ``/api/remove-background``    Remove an image's background
========  ============================  ====================================

Error Mapping
-------------
- Invalid upload or unknown style: 400 with a user-facing message.
- Remote failures (no image in response, transport errors, unreadable
  result images): 502 with a generic message.  The detail is only written
  to the log.

Usage
-----
CLI (installed entry point)::

    restyler-api
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import PurePath

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from PIL import UnidentifiedImageError

from restyler import __version__
from restyler.api.models import (
    BackgroundRemovalRequest,
    ImageResponse,
    PromptRequest,
    TransformRequest,
)
from restyler.core.config import config
from restyler.core.errors import (
    REMOVE_BACKGROUND,
    InvalidInput,
    RemoteCallError,
    failure_message,
)
from restyler.core.generation_client import GenerationClient
from restyler.core.images import SourceImage
from restyler.core.prompt_composer import compose_prompt
from restyler.core.styles import STYLE_OPTIONS, StyleOption, get_style

logger = logging.getLogger(__name__)

QUALITY_OPTIONS = [
    {"id": "standard", "label": "Standard (720p)"},
    {"id": "high", "label": "High (2K–4K)"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the generation client on startup.

    Raises:
        ConfigurationMissing: If the API key is not configured, which
            aborts startup.
    """
    app.state.generation_client = GenerationClient.from_config(config)
    logger.info("GenerationClient initialised (model: %s).", config.model_name)

    yield


app = FastAPI(
    title="Restyler",
    description="AI photo style transformation and background removal.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _resolve_style(style_id: str) -> StyleOption:
    """Look up a style, turning an unknown id into a 400."""
    try:
        return get_style(style_id)
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown style: {style_id}") from None


def _compose(req: PromptRequest) -> str:
    style = _resolve_style(req.style_id)
    return compose_prompt(
        style.prompt_template,
        req.influence,
        req.character_description,
        req.scene_description,
        req.output_quality,
    )


def _decode_image(image_data: str, mime_type: str, filename: str) -> SourceImage:
    """Decode the uploaded image, turning validation failures into a 400."""
    try:
        return SourceImage.from_base64(image_data, mime_type, filename=filename)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _client() -> GenerationClient:
    return app.state.generation_client


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the form configuration for a frontend.

    Returns:
        Dictionary with keys ``version``, ``model``, ``styles``,
        ``quality_options``, and ``defaults``.
    """
    return {
        "version": __version__,
        "model": config.model_name,
        "styles": [{"id": s.id, "name": s.name} for s in STYLE_OPTIONS],
        "quality_options": QUALITY_OPTIONS,
        "defaults": {
            "influence": config.default_influence,
            "output_quality": config.default_quality,
        },
    }


@app.post("/api/prompt/compile")
async def compile_prompt(req: PromptRequest) -> dict:
    """Preview the composed instruction without calling the model.

    Returns:
        Dictionary with a single ``prompt`` key.

    Raises:
        HTTPException: 400 for an unknown style.
    """
    return {"prompt": _compose(req)}


@app.post("/api/transform", response_model=ImageResponse)
def transform(req: TransformRequest) -> ImageResponse:
    """Re-style an uploaded image.

    Raises:
        HTTPException: 400 for an invalid upload or unknown style, 502 when
            the model call fails or returns no image.
    """
    prompt = _compose(req)
    image = _decode_image(req.image_data, req.mime_type, req.filename)

    try:
        result = _client().transform_image(image, prompt)
    except RemoteCallError as e:
        logger.error("Transform failed for %s: %s", image.filename, e)
        raise HTTPException(status_code=502, detail=e.user_message) from e

    return ImageResponse(
        image_data=result.to_base64(),
        mime_type=result.mime_type,
        data_url=result.to_data_url(),
        filename=f"restyled_{PurePath(image.filename).stem}.png",
        prompt=prompt,
    )


@app.post("/api/remove-background", response_model=ImageResponse)
def remove_background(req: BackgroundRemovalRequest) -> ImageResponse:
    """Remove the background of an uploaded image.

    The result is a PNG named ``bg_removed_<filename>``, ready to be sent
    back as the next request's image.

    Raises:
        HTTPException: 400 for an invalid upload, 502 when the model call
            fails or returns no image.
    """
    image = _decode_image(req.image_data, req.mime_type, req.filename)

    try:
        result = _client().remove_background(image)
        new_image = result.as_source_image(f"bg_removed_{image.filename}")
    except RemoteCallError as e:
        logger.error("Background removal failed for %s: %s", image.filename, e)
        raise HTTPException(status_code=502, detail=e.user_message) from e
    except (UnidentifiedImageError, OSError) as e:
        logger.error("Unreadable background removal result for %s: %s", image.filename, e)
        raise HTTPException(status_code=502, detail=failure_message(REMOVE_BACKGROUND)) from e

    return ImageResponse(
        image_data=new_image.to_base64(),
        mime_type=new_image.mime_type,
        data_url=new_image.to_data_url(),
        filename=new_image.filename,
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Fails before binding the port if the API key is missing.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config.require_api_key()

    uvicorn.run(
        "restyler.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
