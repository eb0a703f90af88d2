"""Remote generation client for the Gemini multimodal API.

This module wraps the two remote operations PhotoStudio needs behind a small,
stateless client:

- **edit_image**: submit an image plus a free-text instruction and receive a
  newly generated image.
- **recognize_objects**: submit an image and receive a short ordered list of
  descriptive tags.

Both operations take and return transportable (base64) encodings so that the
workflow layer can hand the result straight to the display surface.

Error Handling
--------------
Every failure leaves this module as a typed error carrying an explicit
category (see ``photostudio.core.errors``). The category for editing failures
is derived from the SDK's typed exceptions and their HTTP status code:

- ``APIError`` with code 400 -> REJECTED_CONTENT
- ``ServerError`` (5xx) -> SERVICE_UNAVAILABLE
- no inline image in the response -> NO_IMAGE
- anything else -> GENERIC

Recognition failures collapse into RECOGNITION_FAILED, except when the model
answered but the answer is not a JSON array of strings, which is
INVALID_TAG_FORMAT. Nothing is retried.

Usage Example
-------------
    >>> from photostudio.core.config import config
    >>> from photostudio.core.gemini_client import GeminiStudioClient
    >>>
    >>> client = GeminiStudioClient(config)
    >>> edited_b64 = await client.edit_image(image_b64, "image/png", "Remove the background")
    >>> tags = await client.recognize_objects(image_b64, "image/png")
"""

import base64
import logging

from google import genai
from google.genai import errors, types
from pydantic import StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .config import PhotoStudioConfig
from .errors import (
    EditErrorCategory,
    ImageEditError,
    RecognitionError,
    RecognitionErrorCategory,
)

logger = logging.getLogger(__name__)

RECOGNITION_PROMPT = (
    "Identify the primary object in this product photo and its category. "
    "Then generate 5 to 7 concise tags describing the object's key attributes, "
    "such as color, material, style and use. "
    "Respond with a JSON array of short strings only."
)

# Tags must be a JSON array whose every element is a string; no coercion.
_TAG_LIST = TypeAdapter(list[StrictStr])

_TAG_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(type=types.Type.STRING),
)


def classify_api_error(error: errors.APIError) -> EditErrorCategory:
    """Map an SDK error onto an editing failure category.

    Args:
        error: Error raised by the google-genai SDK

    Returns:
        REJECTED_CONTENT for a 400, SERVICE_UNAVAILABLE for server errors,
        GENERIC otherwise
    """
    if error.code == 400:
        return EditErrorCategory.REJECTED_CONTENT
    if isinstance(error, errors.ServerError):
        return EditErrorCategory.SERVICE_UNAVAILABLE
    return EditErrorCategory.GENERIC


def _image_part(image_data: str, mime_type: str) -> types.Part:
    return types.Part.from_bytes(data=base64.b64decode(image_data), mime_type=mime_type)


def _first_inline_image(response: types.GenerateContentResponse) -> bytes | None:
    """Return the data of the first response part carrying inline data."""
    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return None

    for part in candidates[0].content.parts or []:
        if part.inline_data is not None and part.inline_data.data:
            return part.inline_data.data
    return None


class GeminiStudioClient:
    """Stateless wrapper around the google-genai async client.

    Attributes
    ----------
    config : PhotoStudioConfig
        Configuration providing model names and the API credential
    """

    def __init__(self, config: PhotoStudioConfig, client: genai.Client | None = None) -> None:
        """Create the client.

        Args:
            config: Application configuration
            client: Pre-built SDK client (a new one is built from the configured
                API key when omitted)

        Raises:
            MissingCredentialError: If no client is given and no API key is configured
        """
        self.config = config
        self._client = client or genai.Client(api_key=config.require_api_key())

    async def edit_image(self, image_data: str, mime_type: str, instruction: str) -> str:
        """Apply a natural-language edit to an image.

        Args:
            image_data: Base64 encoding of the source image
            mime_type: Media type of the source image (e.g. "image/png")
            instruction: Non-empty edit instruction

        Returns:
            Base64 encoding of the generated image

        Raises:
            ImageEditError: If the call fails or no image was produced
        """
        logger.info(f"Requesting image edit from {self.config.edit_model} ({mime_type})")

        try:
            response = await self._client.aio.models.generate_content(
                model=self.config.edit_model,
                contents=[
                    types.Content(
                        role="user",
                        parts=[
                            _image_part(image_data, mime_type),
                            types.Part.from_text(text=instruction),
                        ],
                    )
                ],
                config=types.GenerateContentConfig(
                    response_modalities=[types.Modality.IMAGE],
                ),
            )
        except errors.APIError as e:
            category = classify_api_error(e)
            logger.error(f"Gemini API error during image edit ({e.code}): {e}")
            raise ImageEditError(category) from e
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}", exc_info=True)
            raise ImageEditError(EditErrorCategory.GENERIC) from e

        image_bytes = _first_inline_image(response)
        if image_bytes is None:
            logger.warning("No image data found in the Gemini API response")
            raise ImageEditError(EditErrorCategory.NO_IMAGE)

        logger.info(f"Received edited image ({len(image_bytes)} bytes)")
        return base64.b64encode(image_bytes).decode("ascii")

    async def recognize_objects(self, image_data: str, mime_type: str) -> list[str]:
        """Identify the product in an image and describe it with tags.

        Args:
            image_data: Base64 encoding of the image
            mime_type: Media type of the image

        Returns:
            Ordered list of tag strings

        Raises:
            RecognitionError: If the call fails or the tags are not a JSON
                array of strings
        """
        logger.info(f"Requesting object recognition from {self.config.tagging_model}")

        try:
            response = await self._client.aio.models.generate_content(
                model=self.config.tagging_model,
                contents=[
                    types.Content(
                        role="user",
                        parts=[
                            _image_part(image_data, mime_type),
                            types.Part.from_text(text=RECOGNITION_PROMPT),
                        ],
                    )
                ],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=_TAG_SCHEMA,
                ),
            )
            text = response.text
        except Exception as e:
            logger.error(f"Error recognizing objects: {e}", exc_info=True)
            raise RecognitionError(RecognitionErrorCategory.RECOGNITION_FAILED) from e

        return parse_tags(text)


def parse_tags(text: str | None) -> list[str]:
    """Parse the model's answer into a tag list.

    Args:
        text: Raw response text, expected to be a JSON array of strings

    Returns:
        The parsed tags, in order

    Raises:
        RecognitionError: With INVALID_TAG_FORMAT if the text is not a JSON
            array whose elements are all strings
    """
    if not text:
        logger.warning("Recognition response contained no text")
        raise RecognitionError(RecognitionErrorCategory.INVALID_TAG_FORMAT)

    try:
        return _TAG_LIST.validate_json(text)
    except PydanticValidationError as e:
        logger.warning(f"Invalid tag format in recognition response: {text!r}")
        raise RecognitionError(RecognitionErrorCategory.INVALID_TAG_FORMAT) from e
