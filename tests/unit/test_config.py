"""Tests for restyler.core.config — configuration management.

Tests cover:
- Default values for the model and form settings.
- Environment variable overrides via the RESTYLER_ prefix.
- API key lookup through its fallback environment variables.
- require_api_key() failing when no key is configured.
- Pydantic validation constraints (port range, influence range, quality literal).
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from restyler.core.config import API_KEY_ENV_VARS, RestylerConfig
from restyler.core.errors import ConfigurationMissing


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every API key variable from the environment."""
    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("RESTYLER_MODEL_NAME", raising=False)
    monkeypatch.delenv("RESTYLER_DEFAULT_INFLUENCE", raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Verify that RestylerConfig provides sensible defaults."""

    def test_default_model(self, clean_env):
        """The default model is the Gemini image model."""
        cfg = RestylerConfig(_env_file=None)
        assert cfg.model_name == "gemini-2.5-flash-image"

    def test_form_defaults(self, test_config: RestylerConfig):
        """Influence defaults to 75 and quality to standard."""
        assert test_config.default_influence == 75
        assert test_config.default_quality == "standard"

    def test_server_defaults(self, test_config: RestylerConfig):
        """API and UI ports have distinct defaults."""
        assert test_config.server_port == 8000
        assert test_config.gradio_server_port == 7860
        assert test_config.gradio_share is False

    def test_api_key_not_in_repr(self, test_config: RestylerConfig):
        """The key is never printed."""
        assert "test-key" not in repr(test_config)


class TestConfigEnvironment:
    """Verify environment variable loading."""

    def test_prefixed_override(self, clean_env):
        """RESTYLER_* variables override defaults."""
        clean_env.setenv("RESTYLER_MODEL_NAME", "gemini-custom")
        clean_env.setenv("RESTYLER_DEFAULT_INFLUENCE", "40")

        cfg = RestylerConfig(_env_file=None)

        assert cfg.model_name == "gemini-custom"
        assert cfg.default_influence == 40

    @pytest.mark.parametrize("name", API_KEY_ENV_VARS)
    def test_api_key_from_any_variable(self, clean_env, name):
        """Each supported variable provides the API key."""
        clean_env.setenv(name, f"key-from-{name}")

        cfg = RestylerConfig(_env_file=None)

        assert cfg.require_api_key() == f"key-from-{name}"

    def test_restyler_key_takes_precedence(self, clean_env):
        """RESTYLER_API_KEY wins over the generic fallbacks."""
        clean_env.setenv("API_KEY", "generic")
        clean_env.setenv("GEMINI_API_KEY", "gemini")
        clean_env.setenv("RESTYLER_API_KEY", "restyler")

        assert RestylerConfig(_env_file=None).require_api_key() == "restyler"


class TestRequireApiKey:
    """Verify that a missing key is reported."""

    def test_missing_key_raises(self, clean_env):
        """No key in the environment raises ConfigurationMissing."""
        cfg = RestylerConfig(_env_file=None)

        with pytest.raises(ConfigurationMissing, match="GEMINI_API_KEY"):
            cfg.require_api_key()

    def test_blank_key_raises(self, clean_env):
        """A whitespace-only key counts as missing."""
        cfg = RestylerConfig(api_key="   ", _env_file=None)

        with pytest.raises(ConfigurationMissing):
            cfg.require_api_key()

    def test_key_is_stripped(self, clean_env):
        """Surrounding whitespace is removed."""
        cfg = RestylerConfig(api_key=" abc \n", _env_file=None)
        assert cfg.require_api_key() == "abc"


class TestConfigValidation:
    """Verify Pydantic validation constraints on config fields."""

    @pytest.mark.parametrize("port", [80, 70000])
    def test_invalid_server_port(self, port):
        """Ports outside 1024-65535 are rejected."""
        with pytest.raises(ValidationError):
            RestylerConfig(server_port=port, _env_file=None)

    @pytest.mark.parametrize("influence", [-1, 101])
    def test_invalid_default_influence(self, influence):
        """The default influence must lie in 0-100."""
        with pytest.raises(ValidationError):
            RestylerConfig(default_influence=influence, _env_file=None)

    def test_invalid_default_quality(self):
        """Only 'standard' and 'high' are accepted."""
        with pytest.raises(ValidationError):
            RestylerConfig(default_quality="ultra", _env_file=None)
