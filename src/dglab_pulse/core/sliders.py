"""
Slider lookup tables.

The pulse editor stores frequencies and section durations as slider
positions. These tables map the positions back to physical values.
"""

from __future__ import annotations

from itertools import repeat
from typing import Tuple

from .errors import OutOfRangeError


FREQUENCY_FALLBACK_HZ = 10

_FREQUENCY_TABLE: Tuple[int, ...] = (
    *range(10, 50, 1),
    *range(50, 80, 2),
    *range(80, 100, 5),
    *range(100, 200, 10),
    200, 233, 266, 300, 333, 366,
    *range(400, 600, 50),
    *range(600, 1001, 100),
)

# Irregular spacing is part of the format, keep it literal.
_DURATION_TABLE: Tuple[float, ...] = (
    *repeat(0.1, 5),
    *repeat(0.2, 3),
    *repeat(0.3, 3),
    *repeat(0.4, 2),
    *repeat(0.5, 2),
    *repeat(0.6, 2),
    *repeat(0.7, 2),
    0.8,
    *repeat(0.9, 2),
    1.0,
    *repeat(1.1, 2),
    1.2,
    *repeat(1.3, 2),
    1.4, 1.5,
    *repeat(1.6, 2),
    1.7, 1.8, 1.9, 2.0,
    *repeat(2.1, 2),
    2.2, 2.3, 2.4, 2.5,
    2.6, 2.7, 2.8, 2.9, 3.0,
    3.1, 3.2, 3.3, 3.4, 3.5,
    3.6, 3.7, 3.8, 3.9, 4.1,
    4.2, 4.3, 4.4, 4.5, 4.6,
    4.7, 4.9, 5.0, 5.1, 5.2,
    5.4, 5.5, 5.6, 5.7, 5.9,
    6.0, 6.1, 6.3, 6.4, 6.5,
    6.7, 6.8, 6.9, 7.1, 7.2,
    7.4, 7.5, 7.6, 7.8, 7.9,
    8.1, 8.2, 8.4, 8.5, 8.7,
    8.8, 9.0, 9.1, 9.3, 9.4,
    9.6, 9.7, 9.9, 10.0,
)


def frequency_table_size() -> int:
    return len(_FREQUENCY_TABLE)


def duration_table_size() -> int:
    return len(_DURATION_TABLE)


def frequency_from_slider(index: int) -> int:
    """
    Convert a frequency slider position to Hz.

    Positions outside the table never fail; they resolve to
    :data:`FREQUENCY_FALLBACK_HZ` instead.
    """
    if index < 0 or index >= len(_FREQUENCY_TABLE):
        return FREQUENCY_FALLBACK_HZ
    return _FREQUENCY_TABLE[index]


def duration_from_slider(index: int) -> float:
    """
    Convert a section-time slider position to seconds.

    Raises
    ------
    OutOfRangeError
        If ``index`` is negative or past the end of the table.
    """
    if index < 0 or index >= len(_DURATION_TABLE):
        raise OutOfRangeError(
            f"Section time slider {index} outside [0, {len(_DURATION_TABLE)})"
        )
    return _DURATION_TABLE[index]
