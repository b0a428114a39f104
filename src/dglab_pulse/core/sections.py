"""
Section pulse decoding.

A section chunk is a comma-separated list of tokens. A token is either a bare
value ``V`` or a pair ``R-V``; both produce a single intensity sample of
``V * 5``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .errors import InvalidFormatError
from .header import FIELD_DELIMITER, INTEGER_PATTERN, MAX_PULSE_COUNT, FrequencyMode, PulseHeader


INTENSITY_SCALE = 5
TOKEN_SEPARATOR = "-"

Frequency = Union[int, Tuple[int, int]]


@dataclass(frozen=True)
class SectionInfo:
    """Decoded parameters of one enabled section."""

    pulse: Tuple[int, ...]
    section_time: float
    freq: Frequency
    freq_mode: Optional[FrequencyMode]

    def to_dict(self) -> dict:
        return {
            "pulse": list(self.pulse),
            "sectionTime": self.section_time,
            "freq": list(self.freq) if isinstance(self.freq, tuple) else self.freq,
            "freqMode": self.freq_mode.value if self.freq_mode is not None else None,
        }


def decode_pulse_token(token: str) -> int:
    """
    Decode one pulse token into an intensity sample.

    The leading ``R`` of an ``R-V`` token is not used to repeat the sample.
    TODO: confirm against more exported QR codes whether ``R`` is a run length.
    """
    parts = token.split(TOKEN_SEPARATOR)
    raw_value = parts[0] if len(parts) == 1 else parts[1]
    if not INTEGER_PATTERN.fullmatch(raw_value):
        raise InvalidFormatError(f"Invalid pulse token: {token!r}")
    return int(raw_value) * INTENSITY_SCALE


def decode_pulse_chunk(chunk: str, pulse_count: int) -> Tuple[int, ...]:
    """Decode a section chunk and zero-pad it to ``pulse_count`` samples (never truncated)."""
    if pulse_count > MAX_PULSE_COUNT:
        raise InvalidFormatError(
            f"Pulse count {pulse_count} exceeds the supported maximum of {MAX_PULSE_COUNT}"
        )
    samples = [decode_pulse_token(token) for token in chunk.split(FIELD_DELIMITER)]
    if len(samples) < pulse_count:
        samples.extend([0] * (pulse_count - len(samples)))
    return tuple(samples)


def build_section_frequency(pair: Tuple[int, int], mode: Optional[FrequencyMode]) -> Frequency:
    if mode is None or mode is FrequencyMode.FIXED:
        return pair[0]
    return pair


def decode_sections(header: PulseHeader, section_chunks: Sequence[str]) -> List[SectionInfo]:
    """
    Decode every enabled section that has pulse data.

    Enabled sections without a chunk (or with an empty one) are skipped rather
    than reported as empty sections.
    """
    sections: List[SectionInfo] = []
    for idx, enabled in enumerate(header.section_enabled):
        if not enabled:
            continue
        if idx >= len(section_chunks) or not section_chunks[idx]:
            continue

        mode = header.freq_modes[idx]
        sections.append(
            SectionInfo(
                pulse=decode_pulse_chunk(section_chunks[idx], header.pulse_counts[idx]),
                section_time=header.section_times[idx],
                freq=build_section_frequency(header.freq_pairs[idx], mode),
                freq_mode=mode,
            )
        )
    return sections
