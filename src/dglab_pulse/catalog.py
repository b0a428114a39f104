"""Pulse image catalog utilities."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List


IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")

_ORDER_PREFIX = re.compile(r"^\d+(-|_| )")


def list_pulse_images(directory: Path) -> List[Path]:
    """Return the PNG/JPEG files directly inside ``directory``, sorted by name."""
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Pulse QR directory not found: {root}")
    return sorted(
        path for path in root.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )


def pulse_name_from_path(path: Path) -> str:
    """
    Derive a display name from an image file name.

    A numeric ordering prefix such as ``01-`` or ``3_`` is dropped:
    ``"01-Tide.png"`` becomes ``"Tide"``.
    """
    return _ORDER_PREFIX.sub("", Path(path).stem, count=1)
