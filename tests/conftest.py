"""Shared pytest fixtures for Restyler tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from restyler.core.config import RestylerConfig
from restyler.core.generation_client import GenerationClient, GenerationRequest, ResponsePart
from restyler.core.images import SourceImage
from restyler.ui.models import UIState


class FakeTransport:
    """Transport double that records requests and returns canned parts.

    Attributes:
        parts: Response parts returned by every send()
        error: Exception raised by send() instead, if set
        requests: Every request received, in order
    """

    def __init__(self, parts: list[ResponsePart] | None = None) -> None:
        self.parts = parts if parts is not None else []
        self.error: Exception | None = None
        self.requests: list[GenerationRequest] = []

    def send(self, request: GenerationRequest) -> list[ResponsePart]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.parts


def _encode(mode: str, color: tuple, image_format: str) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (8, 8), color=color).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> RestylerConfig:
    """Configuration with a dummy API key and no .env lookup."""
    return RestylerConfig(api_key="test-key", _env_file=None)


@pytest.fixture
def png_bytes() -> bytes:
    """A small encoded PNG."""
    return _encode("RGBA", (255, 0, 0, 255), "PNG")


@pytest.fixture
def result_png_bytes() -> bytes:
    """A second, distinguishable PNG used as model output."""
    return _encode("RGBA", (0, 0, 255, 0), "PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small encoded JPEG."""
    return _encode("RGB", (0, 255, 0), "JPEG")


@pytest.fixture
def gif_bytes() -> bytes:
    """A small encoded GIF (not an accepted upload type)."""
    return _encode("P", 1, "GIF")


@pytest.fixture
def png_file(temp_dir: Path, png_bytes: bytes) -> Path:
    """A PNG upload on disk."""
    path = temp_dir / "portrait.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def jpeg_file(temp_dir: Path, jpeg_bytes: bytes) -> Path:
    """A JPEG upload on disk."""
    path = temp_dir / "portrait.jpg"
    path.write_bytes(jpeg_bytes)
    return path


@pytest.fixture
def gif_file(temp_dir: Path, gif_bytes: bytes) -> Path:
    """A GIF upload on disk (unsupported type)."""
    path = temp_dir / "animation.gif"
    path.write_bytes(gif_bytes)
    return path


@pytest.fixture
def source_image(png_bytes: bytes) -> SourceImage:
    """A PNG SourceImage."""
    return SourceImage(data=png_bytes, mime_type="image/png", filename="portrait.png")


@pytest.fixture
def fake_transport(result_png_bytes: bytes) -> FakeTransport:
    """Transport returning a text part followed by an image part."""
    return FakeTransport(
        [
            ResponsePart(text="Here is your image."),
            ResponsePart(data=result_png_bytes, mime_type="image/png"),
        ]
    )


@pytest.fixture
def fake_client(fake_transport: FakeTransport) -> GenerationClient:
    """GenerationClient wired to the fake transport."""
    return GenerationClient(fake_transport)


@pytest.fixture
def ui_state(fake_client: GenerationClient) -> UIState:
    """UI state with the fake client attached and no image yet."""
    return UIState(client=fake_client)


@pytest.fixture
def test_client(monkeypatch, test_config: RestylerConfig, fake_client: GenerationClient):
    """FastAPI TestClient whose generation client uses the fake transport."""
    from fastapi.testclient import TestClient

    from restyler.api import main as api_main

    monkeypatch.setattr(api_main, "config", test_config)

    with TestClient(api_main.app) as client:
        api_main.app.state.generation_client = fake_client
        yield client
