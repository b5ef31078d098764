"""Core functionality for style transformation.

- **config**: Configuration management using Pydantic Settings
- **prompt_composer**: Builds the instruction sent with each transform request
- **styles**: Static catalog of style options
- **images**: SourceImage and GenerationResult payloads
- **generation_client**: GenerationClient and the Gemini transport
- **request_state**: Idle / InFlight / Succeeded / Failed request tracking
- **errors**: Exception taxonomy

Usage Example
-------------
    from restyler.core import GenerationClient, compose_prompt, config, get_style

    client = GenerationClient.from_config(config)
    style = get_style("cyberpunk")
    prompt = compose_prompt(style.prompt_template, influence=85, quality="high")
    result = client.transform_image(image, prompt)
"""

from restyler.core.config import RestylerConfig, config
from restyler.core.generation_client import GenerationClient, GeminiTransport
from restyler.core.images import GenerationResult, SourceImage
from restyler.core.prompt_composer import compose_prompt
from restyler.core.request_state import RequestStatus, RequestTracker
from restyler.core.styles import STYLE_OPTIONS, StyleOption, get_style

__all__ = [
    "GenerationClient",
    "GenerationResult",
    "GeminiTransport",
    "RequestStatus",
    "RequestTracker",
    "RestylerConfig",
    "STYLE_OPTIONS",
    "SourceImage",
    "StyleOption",
    "compose_prompt",
    "config",
    "get_style",
]
