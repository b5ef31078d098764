"""Exception taxonomy for Restyler.

=======================  ==============================================  ==========================
Exception                Raised when                                      Handling
=======================  ==============================================  ==========================
ConfigurationMissing     The API key is absent at startup                 Fatal, halts startup
InvalidInput             An upload is not a JPEG/PNG (or is unreadable)   Shown to the user as-is
NoImageInResponse        The model answered without an inline image       Generic message + log
GenerationFailed         Any transport or remote error                    Generic message + log
RequestInFlight          A call is started while another is running       Shown to the user as-is
=======================  ==============================================  ==========================

Remote errors carry the operation that failed so that call sites can show a
generic, operation-specific message while the detail goes to the log.
"""

from __future__ import annotations

TRANSFORM = "transform"
REMOVE_BACKGROUND = "remove_background"

_FAILURE_MESSAGES = {
    TRANSFORM: "Failed to generate image. Please check the logs for more details.",
    REMOVE_BACKGROUND: "Failed to remove background. Please check the logs for more details.",
}


def failure_message(operation: str) -> str:
    """Generic user-facing message for a failed remote operation."""
    return _FAILURE_MESSAGES.get(operation, _FAILURE_MESSAGES[TRANSFORM])


class RestylerError(Exception):
    """Base class for all Restyler errors."""


class ConfigurationMissing(RestylerError):
    """A required configuration value is absent."""


class InvalidInput(RestylerError):
    """User input failed validation.

    The message is intended to be displayed directly to the user.
    """


class RequestInFlight(RestylerError):
    """A remote call was requested while another one is still running."""


class RemoteCallError(RestylerError):
    """Base class for failures of a call to the generation model.

    Attributes:
        operation: Name of the failed operation (``"transform"`` or
            ``"remove_background"``)
    """

    def __init__(self, message: str, operation: str = TRANSFORM) -> None:
        super().__init__(message)
        self.operation = operation

    @property
    def user_message(self) -> str:
        """Generic message safe to show in the UI."""
        return failure_message(self.operation)


class NoImageInResponse(RemoteCallError):
    """The model responded, but no part carried inline image data."""


class GenerationFailed(RemoteCallError):
    """The remote call itself failed (auth, quota, bad request, timeout, ...)."""
