"""
Decoder for DG-LAB pulse QR codes.

Exposes the payload codec (unwrap, header and section decoding, waveform
assembly) together with QR image loading and pulse file exporters.
"""

__version__ = "0.1.0"

from .core.errors import (
    PulseDecodeError,
    InvalidFormatError,
    DecompressionError,
    OutOfRangeError,
)
from .core.sliders import duration_from_slider, frequency_from_slider
from .core.payload import PULSE_URL_MARKER, split_payload, unwrap_payload
from .core.header import FrequencyMode, PulseHeader, decode_header
from .core.sections import SectionInfo, decode_sections
from .core.waveform import PulseWaveform, assemble_waveform, parse_pulse_payload, parse_pulse_url
from .settings import get_settings, reset_settings_cache
from .scanner import QRCodeLoadingError, QRCodeNotFoundError, load_pulse_qr_code, load_qr_code
from .exporters import build_pulse_record, export_pulse_records, pulse_id

__all__ = [
    "__version__",
    "PulseDecodeError",
    "InvalidFormatError",
    "DecompressionError",
    "OutOfRangeError",
    "duration_from_slider",
    "frequency_from_slider",
    "PULSE_URL_MARKER",
    "split_payload",
    "unwrap_payload",
    "FrequencyMode",
    "PulseHeader",
    "decode_header",
    "SectionInfo",
    "decode_sections",
    "PulseWaveform",
    "assemble_waveform",
    "parse_pulse_payload",
    "parse_pulse_url",
    "get_settings",
    "reset_settings_cache",
    "QRCodeLoadingError",
    "QRCodeNotFoundError",
    "load_pulse_qr_code",
    "load_qr_code",
    "build_pulse_record",
    "export_pulse_records",
    "pulse_id",
]
