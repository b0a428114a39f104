"""
Header chunk decoding.

The header is a comma-separated list of integers at fixed positions:

====== =====================================================
Fields Meaning
====== =====================================================
0-2    frequency slider A of sections 1-3
3-5    frequency slider B of sections 1-3
6-8    pulse count of sections 1-3
9-11   section time slider of sections 1-3
12-14  frequency mode of sections 1-3
15-16  enable flags of sections 2 and 3
17     sleep time slider
18     unclassified, passed through
19     speed factor
====== =====================================================
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidFormatError
from .sliders import duration_from_slider, frequency_from_slider


HEADER_FIELD_COUNT = 20
FIELD_DELIMITER = ","

INTEGER_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")

# Largest pulse count a section may declare.
MAX_PULSE_COUNT = 10000


class FrequencyMode(str, Enum):
    """Frequency modes a section can be configured with."""

    FIXED = "fixed"
    IN_SECTION = "inSection"
    IN_PULSE = "inPulse"
    PER_PULSE = "perPulse"

    @classmethod
    def from_code(cls, code: int) -> Optional["FrequencyMode"]:
        """Map a header mode code to a mode; unknown codes yield ``None``."""
        return _MODE_CODES.get(code)


_MODE_CODES = {
    1: FrequencyMode.FIXED,
    2: FrequencyMode.IN_SECTION,
    3: FrequencyMode.IN_PULSE,
    4: FrequencyMode.PER_PULSE,
}


@dataclass(frozen=True)
class PulseHeader:
    """Per-section parameters and global settings decoded from the header chunk."""

    freq_pairs: Tuple[Tuple[int, int], ...]
    pulse_counts: Tuple[int, ...]
    section_times: Tuple[float, ...]
    freq_modes: Tuple[Optional[FrequencyMode], ...]
    section_enabled: Tuple[bool, ...]
    sleep_time: float
    reserved: int
    speed_factor: int


def parse_header_fields(header_chunk: str) -> List[int]:
    """
    Parse the first :data:`HEADER_FIELD_COUNT` header fields as integers.

    Raises
    ------
    InvalidFormatError
        If the header has too few fields or a field is not an integer.
    """
    raw_fields = header_chunk.split(FIELD_DELIMITER)
    if len(raw_fields) < HEADER_FIELD_COUNT:
        raise InvalidFormatError(
            f"Pulse header has {len(raw_fields)} fields, expected {HEADER_FIELD_COUNT}"
        )

    fields: List[int] = []
    for idx, raw in enumerate(raw_fields[:HEADER_FIELD_COUNT]):
        if not INTEGER_PATTERN.fullmatch(raw):
            raise InvalidFormatError(f"Pulse header field {idx} is not an integer: {raw!r}")
        fields.append(int(raw))
    return fields


def sleep_time_from_slider(value: int) -> float:
    """Quantize the sleep slider into seconds (0, 0.1, 0.2, ... in steps of ten)."""
    if value == 0:
        return 0
    return math.floor((value - 1) / 10) / 10 + 0.1


def decode_header(header_chunk: str) -> PulseHeader:
    fields = parse_header_fields(header_chunk)
    return build_header(fields)


def _check_pulse_counts(counts: Sequence[int]) -> Tuple[int, ...]:
    for offset, count in enumerate(counts):
        if count > MAX_PULSE_COUNT:
            raise InvalidFormatError(
                f"Pulse header field {6 + offset} declares {count} pulses, "
                f"at most {MAX_PULSE_COUNT} are supported"
            )
    return tuple(counts)


def build_header(fields: Sequence[int]) -> PulseHeader:
    # Slider A and B of a section are three fields apart, not adjacent.
    freq_pairs = tuple(
        (frequency_from_slider(fields[i]), frequency_from_slider(fields[i + 3]))
        for i in range(3)
    )
    return PulseHeader(
        freq_pairs=freq_pairs,
        pulse_counts=_check_pulse_counts(fields[6:9]),
        section_times=tuple(duration_from_slider(value) for value in fields[9:12]),
        freq_modes=tuple(FrequencyMode.from_code(value) for value in fields[12:15]),
        # Section 1 has no flag and is always on.
        section_enabled=(True, fields[15] == 1, fields[16] == 1),
        sleep_time=sleep_time_from_slider(fields[17]),
        reserved=fields[18],
        speed_factor=fields[19],
    )
