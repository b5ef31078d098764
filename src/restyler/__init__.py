"""Restyler - AI photo style transformation powered by Gemini."""

__version__ = "0.1.0"

from restyler.core.config import RestylerConfig, config
from restyler.core.generation_client import GenerationClient
from restyler.core.prompt_composer import compose_prompt

__all__ = [
    "GenerationClient",
    "RestylerConfig",
    "compose_prompt",
    "config",
]
