"""
Scanning of pulse QR code images.

Reads screenshots or photos of pulse QR codes with OpenCV and returns the
embedded text or the decoded waveform.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from .core.waveform import PulseWaveform, parse_pulse_url
from .settings import max_inflated_bytes as default_max_inflated_bytes


logger = logging.getLogger(__name__)


class QRCodeLoadingError(RuntimeError):
    """Raised when an image cannot be read."""


class QRCodeNotFoundError(QRCodeLoadingError):
    """Raised when an image does not contain a readable QR code."""


def read_image(path: Path) -> np.ndarray:
    """
    Load an image as a BGR array.

    The bytes are read with NumPy and decoded by OpenCV so that file names
    with non-ASCII characters are supported.
    """
    path = Path(path)
    try:
        buffer = np.fromfile(str(path), dtype=np.uint8)
    except OSError as exc:
        raise QRCodeLoadingError(f"Failed to read image file: {path}") from exc

    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise QRCodeLoadingError(f"Failed to decode image: {path}")
    return image


def _detect(detector: cv2.QRCodeDetector, image: np.ndarray) -> str:
    try:
        text, _points, _straight = detector.detectAndDecode(image)
    except cv2.error as exc:
        raise QRCodeLoadingError(f"QR code detection failed: {exc}") from exc
    return text or ""


def decode_qr_image(image: np.ndarray) -> Optional[str]:
    """Return the text of the QR code in ``image``, or ``None`` when nothing is found."""
    detector = cv2.QRCodeDetector()
    text = _detect(detector, image)
    if text:
        return text

    # Second pass on a binarised copy helps with low-contrast photos.
    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY) if image.ndim == 3 else image
    _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    text = _detect(detector, binary)
    return text or None


def load_qr_code(path: Path) -> str:
    image = read_image(path)
    text = decode_qr_image(image)
    if text is None:
        raise QRCodeNotFoundError(f"No QR code found in {path}")
    logger.debug("Read %d characters of QR text from %s", len(text), path)
    return text


def load_pulse_qr_code(path: Path, max_inflated_bytes: Optional[int] = None) -> PulseWaveform:
    """Load a pulse QR image and decode it into a :class:`PulseWaveform`."""
    if max_inflated_bytes is None:
        max_inflated_bytes = default_max_inflated_bytes()
    return parse_pulse_url(load_qr_code(path), max_inflated_bytes=max_inflated_bytes)
