"""
Waveform assembly.

Combines the decoded header and section pulses into a :class:`PulseWaveform`
and exposes the full URL-to-waveform pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from .header import PulseHeader, decode_header
from .payload import DEFAULT_MAX_INFLATED_BYTES, split_payload, unwrap_payload
from .sections import SectionInfo, decode_sections


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PulseWaveform:
    """Decoded pulse waveform: enabled sections in order plus global timing."""

    sections: Tuple[SectionInfo, ...]
    sleep_time: float
    speed_factor: int

    def to_dict(self) -> dict:
        return {
            "sections": [section.to_dict() for section in self.sections],
            "sleepTime": self.sleep_time,
            "speedFactor": self.speed_factor,
        }


def assemble_waveform(header: PulseHeader, sections: Sequence[SectionInfo]) -> PulseWaveform:
    return PulseWaveform(
        sections=tuple(sections),
        sleep_time=header.sleep_time,
        speed_factor=header.speed_factor,
    )


def parse_pulse_payload(payload: str) -> PulseWaveform:
    """Decode an already unwrapped plaintext payload."""
    header_chunk, section_chunks = split_payload(payload)
    header = decode_header(header_chunk)
    sections = decode_sections(header, section_chunks)
    logger.debug(
        "Decoded %d of %d section chunk(s), enabled=%s",
        len(sections),
        len(section_chunks),
        header.section_enabled,
    )
    return assemble_waveform(header, sections)


def parse_pulse_url(url: str, max_inflated_bytes: int = DEFAULT_MAX_INFLATED_BYTES) -> PulseWaveform:
    """
    Decode the text of a pulse QR code into a waveform.

    Parameters
    ----------
    url:
        QR code text containing the ``#DGLAB-PULSE#`` marker.
    max_inflated_bytes:
        Upper bound for the gzip-inflated payload size.

    Returns
    -------
    PulseWaveform
        Decoded waveform. A payload without decodable sections yields an empty
        ``sections`` tuple.

    Raises
    ------
    PulseDecodeError
        Any :mod:`~dglab_pulse.core.errors` subclass raised by one of the layers.
    """
    payload = unwrap_payload(url, max_inflated_bytes=max_inflated_bytes)
    return parse_pulse_payload(payload)
