"""
Kernel exceptions and structured error keys for command-line failures.
Use the keys in log output; map them to user-facing messages with user_message.
"""

from __future__ import annotations


class BorderlineError(Exception):
    """Base class for every error raised by the outline kernel."""


class InvalidInputError(BorderlineError, ValueError):
    """A rectangle has NaN/infinite coordinates or is not rectangle-shaped."""


class TraceFailure(BorderlineError, RuntimeError):
    """The boundary walk found no continuation edge; the edge set is inconsistent."""

    def __init__(self, message: str, point: tuple[float, float] | None = None) -> None:
        super().__init__(message)
        self.point = point


# Known error keys
INVALID_INPUT = "invalid_input"
TRACE_FAILED = "trace_failed"
INPUT_NOT_FOUND = "input_not_found"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    INVALID_INPUT: "Rectangle input is malformed. Check for NaN, infinite or missing coordinates.",
    TRACE_FAILED: "Outline could not be traced. Keep the previous outline and retry on the next layout.",
    INPUT_NOT_FOUND: "Rectangle file not found. Check the --rectangles path.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
