"""Typed errors raised by the remote generation client.

Each remote failure carries an explicit category chosen by the client at the
point of the call, so callers never need to inspect error text. The category
also owns the message shown to the user.
"""

from enum import Enum


class MissingCredentialError(RuntimeError):
    """Raised at startup when no API credential has been configured."""


class EditErrorCategory(str, Enum):
    """Failure classes for image editing requests."""

    REJECTED_CONTENT = "rejected_content"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NO_IMAGE = "no_image"
    GENERIC = "generic"


class RecognitionErrorCategory(str, Enum):
    """Failure classes for object recognition requests."""

    RECOGNITION_FAILED = "recognition_failed"
    INVALID_TAG_FORMAT = "invalid_tag_format"


EDIT_ERROR_MESSAGES = {
    EditErrorCategory.REJECTED_CONTENT: (
        "Bad request. The prompt or image may be inappropriate or unsupported. "
        "Please try again."
    ),
    EditErrorCategory.SERVICE_UNAVAILABLE: (
        "The AI model is currently unavailable. Please try again later."
    ),
    EditErrorCategory.NO_IMAGE: (
        "The AI model did not return an image. Try rephrasing your instruction."
    ),
    EditErrorCategory.GENERIC: "Failed to generate image. Please check the logs for details.",
}

RECOGNITION_ERROR_MESSAGES = {
    RecognitionErrorCategory.RECOGNITION_FAILED: "Failed to recognize objects in the image.",
    RecognitionErrorCategory.INVALID_TAG_FORMAT: "The AI model returned tags in an invalid format.",
}


class StudioError(Exception):
    """Base class for remote-call failures surfaced to the user."""

    def __init__(self, category: Enum, message: str) -> None:
        super().__init__(message)
        self.category = category

    @property
    def user_message(self) -> str:
        return str(self)


class ImageEditError(StudioError):
    """Image editing failed; ``category`` tells the caller why."""

    def __init__(self, category: EditErrorCategory) -> None:
        super().__init__(category, EDIT_ERROR_MESSAGES[category])


class RecognitionError(StudioError):
    """Object recognition failed; ``category`` tells the caller why."""

    def __init__(self, category: RecognitionErrorCategory) -> None:
        super().__init__(category, RECOGNITION_ERROR_MESSAGES[category])
