"""Validation utilities for PhotoStudio UI inputs."""

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .models import (
    ALLOWED_MIME_TYPES,
    MAX_UPLOAD_BYTES,
    MAX_UPLOAD_LABEL,
    EditRequest,
    ImageSelection,
)

logger = logging.getLogger(__name__)

# Pillow reports JPEGs carrying extra frames (depth, portrait shots) as MPO
_FORMAT_ALIASES = {"MPO": "JPEG"}


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_upload_size(size: int) -> None:
    """Validate the size of an uploaded file.

    Args:
        size: File size in bytes

    Raises:
        ValidationError: If the file exceeds the upload limit
    """
    if size > MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"Image size exceeds {MAX_UPLOAD_LABEL}. Please upload a smaller image."
        )


def detect_mime_type(path: Path) -> str:
    """Determine an image's media type from its content.

    Args:
        path: Path to the uploaded file

    Returns:
        MIME type reported by Pillow for the file's format

    Raises:
        ValidationError: If the file is not a readable image, its dimensions
            exceed Pillow's decompression limit or its type is unsupported
    """
    try:
        with Image.open(path) as img:
            image_format = img.format
    except Image.DecompressionBombError as e:
        logger.warning(f"Rejected upload with oversized dimensions: {e}")
        raise ValidationError("Image dimensions are too large. Please upload a smaller image.") from e
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("The selected file is not a readable image.") from e

    image_format = _FORMAT_ALIASES.get(image_format, image_format)
    mime_type = Image.MIME.get(image_format or "", "")
    if mime_type not in ALLOWED_MIME_TYPES:
        logger.warning(f"Rejected upload with unsupported format: {image_format}")
        raise ValidationError("Unsupported image type. Please upload a PNG, JPG, or WEBP image.")
    return mime_type


def load_selection(path: str | Path) -> ImageSelection:
    """Validate an uploaded file and build a selection for it.

    The size check runs first so that oversized files are rejected without
    being opened.

    Args:
        path: Path of the uploaded file

    Returns:
        New ImageSelection with a fresh selection id

    Raises:
        ValidationError: If the file is missing, too large or not a supported image
    """
    file_path = Path(path)
    try:
        size = file_path.stat().st_size
    except OSError as e:
        raise ValidationError("Failed to read the image file.") from e

    validate_upload_size(size)
    mime_type = detect_mime_type(file_path)

    return ImageSelection(path=file_path, mime_type=mime_type, size=size, name=file_path.name)


def validate_edit_request(selection: ImageSelection | None, instruction: str) -> EditRequest:
    """Validate the preconditions of a generate request.

    Args:
        selection: Currently selected image, if any
        instruction: Edit instruction text

    Returns:
        EditRequest ready for submission

    Raises:
        ValidationError: If no image is selected or the instruction is empty
    """
    if selection is None or not instruction or not instruction.strip():
        raise ValidationError("Please upload an image and enter a prompt.")
    return EditRequest(selection=selection, instruction=instruction)
