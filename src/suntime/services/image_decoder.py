"""Decode transport-encoded image payloads into raw encoded bytes."""

import base64
import binascii
import logging
import re

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")
_WHITESPACE = re.compile(r"\s+")
_MAX_PADDING = 2


def decode_image_payload(payload: str | bytes | None) -> bytes | None:
    """Return the raw image bytes carried by a base64 payload.

    The image itself is not decompressed; callers sample the encoded byte
    stream directly. Malformed or truncated payloads yield None.
    """
    if payload is None:
        return None
    if isinstance(payload, bytes | bytearray):
        return bytes(payload)

    cleaned = strip_data_url(payload)
    if not cleaned:
        return None
    if len(cleaned) % 4 == 1:
        logger.warning("Image payload is truncated (%d chars)", len(cleaned))
        return None
    cleaned += "=" * (-len(cleaned) % 4)

    try:
        decoded = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Image payload is not valid base64")
        return None

    expected = decoded_length(cleaned)
    if len(decoded) != expected:
        logger.warning(
            "Image payload decoded to %d bytes, expected %d", len(decoded), expected
        )
        return None
    return decoded


def strip_data_url(payload: str) -> str:
    """Remove a data URL media-type header and any whitespace."""
    return _WHITESPACE.sub("", _DATA_URL_PREFIX.sub("", payload.strip()))


def decoded_length(encoded: str) -> int:
    """Size of the byte buffer a padded base64 string decodes to."""
    length = len(encoded) * 3 // 4
    padding = len(encoded) - len(encoded.rstrip("="))
    return length - min(padding, _MAX_PADDING)
