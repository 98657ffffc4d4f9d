"""Errors raised by the generation pipeline."""

from typing import Optional


class GenerationError(Exception):
    """Base class for anything that prevents an artifact from being produced."""


class ProviderUnavailableError(GenerationError):
    """Raised when the primary and the secondary provider both failed."""

    def __init__(self, primary_error: Exception, secondary_error: Exception):
        self.primary_error = primary_error
        self.secondary_error = secondary_error
        super().__init__(
            f"All providers failed (primary: {primary_error}; secondary: {secondary_error})"
        )


class ResponseParseError(GenerationError):
    """Raised when provider output is not valid JSON or lacks a required marker."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        self.raw_text = raw_text
        super().__init__(message)
