from typing import Optional


class MedChatError(Exception):
    """Base class for errors raised by the chat pipeline."""


class ModelUnavailable(MedChatError):
    """The completion endpoint could not be reached, timed out, or returned non-2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(MedChatError):
    """The provider answered, but without a usable choices[0].message.content."""


class ExtractionAmbiguous(MedChatError):
    """A model reply did not have the shape an extractor expects.

    Extractors log this and fall back to null/empty values; it is not raised
    out of them.
    """


class TurnFailed(MedChatError):
    """Every model call for a turn failed, so there is nothing to return."""

    def __init__(self, errors: dict):
        super().__init__("All model calls failed: " + "; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors
