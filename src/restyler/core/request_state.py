"""Lifecycle tracking for remote calls.

Every remote call goes through a small state machine::

    IDLE ──begin()──▶ IN_FLIGHT ──succeed()──▶ SUCCEEDED
                          │
                          └──────fail()──────▶ FAILED

``begin()`` is accepted from any state except ``IN_FLIGHT``, so a finished
request can be followed by a new one. Starting a request while another is
in flight raises :class:`RequestInFlight`; this is what keeps two calls from
racing to replace the current image.
"""

from __future__ import annotations

import logging
from enum import Enum

from .errors import RequestInFlight

logger = logging.getLogger(__name__)


class RequestStatus(str, Enum):
    """Status of the most recent remote call."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestTracker:
    """Tracks the single outstanding remote call of a session.

    Attributes:
        status: Current :class:`RequestStatus`
        operation: Operation of the current/most recent call, or None
        error: User-facing message of the last failure, or None
    """

    def __init__(self) -> None:
        self.status = RequestStatus.IDLE
        self.operation: str | None = None
        self.error: str | None = None

    @property
    def is_busy(self) -> bool:
        """True while a call is in flight."""
        return self.status is RequestStatus.IN_FLIGHT

    def begin(self, operation: str) -> None:
        """Mark a call as started.

        Raises:
            RequestInFlight: If another call has not finished yet
        """
        if self.is_busy:
            raise RequestInFlight(
                f"Cannot start {operation}: {self.operation} is still in progress."
            )
        self.status = RequestStatus.IN_FLIGHT
        self.operation = operation
        self.error = None
        logger.debug(f"Request started: {operation}")

    def succeed(self) -> None:
        """Mark the in-flight call as successful."""
        self._finish(RequestStatus.SUCCEEDED)

    def fail(self, message: str) -> None:
        """Mark the in-flight call as failed with a user-facing message."""
        self._finish(RequestStatus.FAILED)
        self.error = message

    def reset(self) -> None:
        """Return to IDLE, e.g. after a new upload."""
        if self.is_busy:
            raise RequestInFlight(f"Cannot reset: {self.operation} is still in progress.")
        self.status = RequestStatus.IDLE
        self.operation = None
        self.error = None

    def _finish(self, status: RequestStatus) -> None:
        if not self.is_busy:
            raise RuntimeError(f"No request in flight (status: {self.status.value})")
        self.status = status
        logger.debug(f"Request {self.operation} finished: {status.value}")

    def __repr__(self) -> str:
        return f"RequestTracker(status={self.status.value}, operation={self.operation})"
