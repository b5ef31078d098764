"""State management utilities for Restyler UI.

This module handles the initialization and cleanup of per-session UI state.
"""

import logging

from restyler.core.config import config
from restyler.core.generation_client import GenerationClient

from .models import UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    If state is None a new one is created; if it has no generation client
    one is built from the global configuration.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance

    Raises:
        ConfigurationMissing: If the API key is not configured
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    logger.info(f"Initializing GenerationClient (model: {config.model_name})")
    state.client = GenerationClient.from_config(config)
    logger.info(f"UIState initialization complete: {state}")
    return state


def cleanup_ui_state(state: UIState) -> None:
    """Drop the session's images and client.

    Args:
        state: UI state to clean up
    """
    logger.info("Cleaning up UIState resources")
    state.client = None
    state.current_image = None
    state.generated_image = None
    if not state.request.is_busy:
        state.request.reset()
