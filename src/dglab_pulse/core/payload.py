"""
Payload unwrapping and tokenization.

A pulse QR code carries a URL of the form ``...#DGLAB-PULSE#<hex>``. The hex
string is a gzip stream whose content is base64 text, and the base64 text
decodes to the plaintext payload::

    header+section1+section2+section3
"""

from __future__ import annotations

import base64
import binascii
import logging
import zlib
from typing import List, Tuple

from .errors import DecompressionError, InvalidFormatError


logger = logging.getLogger(__name__)

PULSE_URL_MARKER = "#DGLAB-PULSE#"
CHUNK_DELIMITER = "+"
MAX_SECTIONS = 3
DEFAULT_MAX_INFLATED_BYTES = 1024 * 1024

_GZIP_WBITS = 16 + zlib.MAX_WBITS
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def _hex_to_bytes(text: str) -> bytes:
    try:
        return bytes.fromhex(text.strip())
    except ValueError as exc:
        raise InvalidFormatError(f"Pulse data is not a valid hex string: {exc}") from exc


def _inflate(compressed: bytes, max_inflated_bytes: int) -> bytes:
    inflater = zlib.decompressobj(wbits=_GZIP_WBITS)
    try:
        inflated = inflater.decompress(compressed, max_inflated_bytes + 1)
    except zlib.error as exc:
        raise DecompressionError(f"Malformed gzip stream: {exc}") from exc

    if len(inflated) > max_inflated_bytes:
        raise InvalidFormatError(
            f"Inflated pulse data exceeds the limit of {max_inflated_bytes} bytes"
        )
    if not inflater.eof:
        raise DecompressionError("Truncated gzip stream")
    return inflated


def _decode_utf8(data: bytes, layer: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFormatError(f"{layer} is not valid UTF-8: {exc}") from exc


def _decode_base64(text: str) -> bytes:
    compact = "".join(text.split()).translate(_URLSAFE_TO_STANDARD).rstrip("=")
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact)
    except binascii.Error as exc:
        raise InvalidFormatError(f"Inflated pulse data is not valid base64: {exc}") from exc


def unwrap_payload(url: str, max_inflated_bytes: int = DEFAULT_MAX_INFLATED_BYTES) -> str:
    """
    Recover the plaintext pulse payload from a scanned QR code URL.

    Parameters
    ----------
    url:
        Text decoded from the QR code. The hex payload runs from the first
        :data:`PULSE_URL_MARKER` to the next one, or to the end of the text.
    max_inflated_bytes:
        Upper bound for the size of the gzip-inflated data.

    Raises
    ------
    InvalidFormatError
        If the marker is missing, or the hex, base64 or UTF-8 layer is malformed,
        or the inflated data is larger than ``max_inflated_bytes``.
    DecompressionError
        If the gzip stream is malformed or truncated.
    """
    if PULSE_URL_MARKER not in url:
        raise InvalidFormatError("Invalid QR code, not a DG-LAB pulse QR code")

    pulse_hex = url.split(PULSE_URL_MARKER)[1]
    compressed = _hex_to_bytes(pulse_hex)
    inflated = _inflate(compressed, max_inflated_bytes)
    logger.debug("Inflated %d gzip bytes into %d bytes", len(compressed), len(inflated))

    encoded = _decode_utf8(inflated, "Inflated pulse data")
    return _decode_utf8(_decode_base64(encoded), "Decoded pulse payload")


def split_payload(payload: str) -> Tuple[str, List[str]]:
    """
    Split a plaintext payload into its header chunk and section chunks.

    Only the first :data:`MAX_SECTIONS` section chunks are returned; a section
    without a chunk simply has no pulse data.
    """
    chunks = payload.split(CHUNK_DELIMITER)
    if len(chunks) < 2:
        raise InvalidFormatError("Invalid pulse data, expected a header and at least one section")
    return chunks[0], chunks[1 : 1 + MAX_SECTIONS]
