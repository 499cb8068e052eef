"""JSON extraction from free-form provider responses.

Providers are instructed to answer with a single JSON object, but replies
often wrap it in prose or markdown fences. Everything here works on the
raw reply text.
"""

import json
import re
from typing import Any

from loguru import logger

from taskpilot.providers.errors import ResponseFormatError, ResponseParseError

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> dict[str, Any]:
    """Extract the JSON object embedded in a provider response.

    The object starting at the first ``{`` is decoded directly so that
    trailing prose is ignored. If that fails, the greedy region from the
    first ``{`` to the last ``}`` is tried instead.

    Args:
        text: Raw response text.

    Returns:
        The decoded JSON object.

    Raises:
        ResponseParseError: No ``{...}`` region exists in the text.
        ResponseFormatError: The region is not a valid JSON object.

    Example:
        >>> extract_json_object('Here you go: {"tasks": []} Enjoy!')
        {'tasks': []}
    """
    match = JSON_OBJECT_PATTERN.search(text or "")
    if match is None:
        raise ResponseParseError("Failed to parse JSON from response")

    try:
        parsed, _ = _decoder.raw_decode(text, match.start())
    except json.JSONDecodeError:
        logger.debug("Leading JSON object did not decode, trying greedy region")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ResponseFormatError(f"Invalid JSON in response: {e.msg}") from e

    if not isinstance(parsed, dict):
        raise ResponseFormatError("Invalid response format")

    return parsed


def require_list_field(payload: dict[str, Any], field: str) -> list[Any]:
    """Get a required array field from an extracted payload.

    Args:
        payload: Decoded JSON object.
        field: Name of the array field, e.g. ``"tasks"``.

    Returns:
        The list stored under ``field``.

    Raises:
        ResponseFormatError: Field missing or not a list.
    """
    value = payload.get(field)
    if not isinstance(value, list):
        raise ResponseFormatError("Invalid response format")
    return value
