"""Tests for restyler.api.models — request/response validation.

Tests cover:
- Default values of the prompt parameters.
- Influence range validation.
- Required image fields on the image endpoints.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from restyler.api.models import (
    BackgroundRemovalRequest,
    ImageResponse,
    PromptRequest,
    TransformRequest,
)


class TestPromptRequest:
    """Verify PromptRequest defaults and constraints."""

    def test_defaults(self):
        req = PromptRequest(style_id="cyberpunk")

        assert req.influence == 75
        assert req.character_description == ""
        assert req.scene_description == ""
        assert req.output_quality == "standard"

    def test_style_required(self):
        with pytest.raises(ValidationError):
            PromptRequest()

    @pytest.mark.parametrize("influence", [-1, 101])
    def test_influence_out_of_range(self, influence):
        with pytest.raises(ValidationError):
            PromptRequest(style_id="cyberpunk", influence=influence)

    @pytest.mark.parametrize("influence", [0, 30, 70, 100])
    def test_influence_in_range(self, influence):
        assert PromptRequest(style_id="cyberpunk", influence=influence).influence == influence

    def test_unknown_quality_is_accepted(self):
        """Any quality string is accepted; non-'high' means standard."""
        assert PromptRequest(style_id="cyberpunk", output_quality="ultra").output_quality == "ultra"


class TestTransformRequest:
    """Verify TransformRequest."""

    def test_inherits_prompt_fields(self):
        req = TransformRequest(style_id="cyberpunk", image_data="abc", mime_type="image/png")

        assert req.influence == 75
        assert req.filename == "image"

    def test_image_required(self):
        with pytest.raises(ValidationError):
            TransformRequest(style_id="cyberpunk", mime_type="image/png")


class TestBackgroundRemovalRequest:
    """Verify BackgroundRemovalRequest."""

    def test_mime_type_required(self):
        with pytest.raises(ValidationError):
            BackgroundRemovalRequest(image_data="abc")

    def test_filename_default(self):
        req = BackgroundRemovalRequest(image_data="abc", mime_type="image/jpeg")
        assert req.filename == "image"


class TestImageResponse:
    """Verify ImageResponse."""

    def test_prompt_optional(self):
        resp = ImageResponse(
            image_data="YWJj",
            mime_type="image/png",
            data_url="data:image/png;base64,YWJj",
            filename="bg_removed_a.png",
        )
        assert resp.prompt is None
