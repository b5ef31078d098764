"""Tests for GeminiTransport with the google-genai client mocked out."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from restyler.core.generation_client import (
    GeminiTransport,
    GenerationRequest,
    ResponsePart,
    _parts_from_response,
)


def _response(*parts):
    """Build an object shaped like a GenerateContentResponse."""
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def _image_part(data, mime_type="image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def _text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


class TestPartsFromResponse:
    """Test normalization of SDK responses."""

    def test_mixed_parts_keep_order(self):
        """Text and image parts are normalized in order."""
        parts = _parts_from_response(_response(_text_part("hello"), _image_part(b"img")))

        assert parts == [
            ResponsePart(text="hello"),
            ResponsePart(data=b"img", mime_type="image/png"),
        ]

    @pytest.mark.parametrize(
        "response",
        [
            SimpleNamespace(candidates=None),
            SimpleNamespace(candidates=[]),
            SimpleNamespace(candidates=[SimpleNamespace(content=None)]),
            SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=None))]),
        ],
    )
    def test_missing_content_gives_no_parts(self, response):
        """Missing candidates, content or parts all normalize to an empty list."""
        assert _parts_from_response(response) == []

    def test_empty_inline_data_is_not_an_image(self):
        """A part with empty inline bytes is not treated as an image."""
        parts = _parts_from_response(_response(_image_part(b"")))

        assert len(parts) == 1
        assert not parts[0].has_image


class TestGeminiTransport:
    """Test GeminiTransport.send() against a mocked SDK client."""

    def test_client_created_lazily(self):
        """No SDK client exists until the first request."""
        with patch("google.genai.Client") as mock_client_cls:
            transport = GeminiTransport(api_key="key", model_name="gemini-2.5-flash-image")
            mock_client_cls.assert_not_called()

            transport._get_client()
            transport._get_client()

        mock_client_cls.assert_called_once_with(api_key="key")

    def test_send_builds_request(self, source_image):
        """The image bytes, prompt and IMAGE modality are sent to the model."""
        with patch("google.genai.Client") as mock_client_cls:
            generate = mock_client_cls.return_value.models.generate_content
            generate.return_value = _response(_text_part("ok"), _image_part(b"out"))

            transport = GeminiTransport(api_key="key", model_name="gemini-2.5-flash-image")
            parts = transport.send(GenerationRequest(image=source_image, prompt="Restyle."))

        generate.assert_called_once()
        kwargs = generate.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"

        image_part, prompt = kwargs["contents"]
        assert image_part.inline_data.data == source_image.data
        assert image_part.inline_data.mime_type == "image/png"
        assert prompt == "Restyle."
        assert kwargs["config"].response_modalities == ["IMAGE"]

        assert parts[1] == ResponsePart(data=b"out", mime_type="image/png")

    def test_sdk_errors_propagate(self, source_image):
        """SDK exceptions are left for the GenerationClient to wrap."""
        with patch("google.genai.Client") as mock_client_cls:
            mock_client_cls.return_value.models.generate_content.side_effect = RuntimeError("401")

            transport = GeminiTransport(api_key="bad", model_name="gemini-2.5-flash-image")
            with pytest.raises(RuntimeError, match="401"):
                transport.send(GenerationRequest(image=source_image, prompt="Restyle."))
