"""
Error taxonomy for the extraction pipeline.

Everything raised on purpose derives from SudokuError so the CLI can
report it and exit non-zero. TransientInteractionFailure is the only kind
the retry loop treats as recoverable on its own; all others are fatal.
"""
from typing import Optional


class SudokuError(Exception):
    """Base class for all pipeline errors."""


class InteractionError(SudokuError):
    """A browser interaction step could not complete."""


class LocatorTimeout(InteractionError):
    def __init__(self, locator: str, timeout_ms: int):
        super().__init__(f"Element {locator!r} did not appear within {timeout_ms}ms")
        self.locator = locator
        self.timeout_ms = timeout_ms


class RetryExhaustedError(InteractionError):
    def __init__(self, attempts: int, last_error: Optional[BaseException]):
        super().__init__(f"Giving up after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class TransientInteractionFailure(SudokuError):
    """An element was momentarily not interactable; safe to retry."""


class StructuralValidationError(SudokuError, ValueError):
    """Captured markup does not have the expected row/cell/value shape."""


class NumericParseError(StructuralValidationError):
    """A fixed value's text is not a single digit 1-9."""
