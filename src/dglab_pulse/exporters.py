"""Output exporters for decoded pulses.

Provides helpers for turning decoded waveforms into named records and writing
record lists as JSON (readable by JSON5 consumers) or YAML.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Iterable, List, Literal

import yaml

from .core.waveform import PulseWaveform

ExportFormat = Literal["json", "yaml"]

PULSE_ID_LENGTH = 8


def pulse_id(waveform: PulseWaveform) -> str:
    """
    Derive a short, stable identifier for a waveform.

    The identifier is the MD5 digest of the canonical JSON encoding of the
    waveform, truncated to :data:`PULSE_ID_LENGTH` hex characters.
    """
    canonical = json.dumps(waveform.to_dict(), sort_keys=True, separators=(",", ":"))
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()[:PULSE_ID_LENGTH]


def build_pulse_record(name: str, waveform: PulseWaveform) -> dict:
    return {
        "id": pulse_id(waveform),
        "name": name,
        "pulse": waveform.to_dict(),
    }


def export_pulse_json(records: Iterable[dict], output_path: Path) -> None:
    """
    Write pulse records to a JSON file.

    The output is plain JSON indented by four spaces, which any JSON5 reader
    accepts.
    """
    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(list(records), handle, indent=4, ensure_ascii=False)


def export_pulse_yaml(records: Iterable[dict], output_path: Path) -> None:
    with output_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(list(records), handle, sort_keys=False, allow_unicode=True)


def export_pulse_records(
    records: Iterable[dict],
    output_path: Path,
    fmt: ExportFormat = "json",
) -> Path:
    """
    Export pulse records in the requested format.

    Returns the path of the written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    records_list: List[dict] = list(records)
    if fmt == "json":
        export_pulse_json(records_list, output_path)
    elif fmt == "yaml":
        export_pulse_yaml(records_list, output_path)
    else:
        raise ValueError(f"Unsupported export format: {fmt}")
    return output_path
