"""
Command-line interface for decoding DG-LAB pulse QR codes.

Usage:
    dglab-pulse generate path/to/pulse_qr_dir [-o pulse.json5] [--format json]
    dglab-pulse decode path/to/pulse.png|URL [--json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .catalog import list_pulse_images, pulse_name_from_path
from .core.errors import PulseDecodeError
from .core.payload import PULSE_URL_MARKER
from .core.waveform import PulseWaveform, parse_pulse_url
from .exporters import build_pulse_record, export_pulse_records
from .scanner import QRCodeLoadingError, load_pulse_qr_code
from .settings import get_settings

Logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dglab-pulse",
        description="Parse DG-LAB pulse QR codes and export the decoded pulse data.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Decode every pulse QR image in a directory and write a pulse file.",
    )
    generate_parser.add_argument(
        "pulse_qr_dir",
        type=Path,
        help="Directory containing pulse QR code images (.png, .jpg, .jpeg).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output pulse file (defaults to DGLAB_PULSE_OUTPUT_FILE or pulse.json5).",
    )
    generate_parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default=None,
        help="Output format (defaults to DGLAB_PULSE_OUTPUT_FORMAT or json).",
    )

    # decode command
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a single QR image or pulse URL and print it.",
    )
    decode_parser.add_argument(
        "source",
        type=str,
        help=f"Path to a QR code image, or the scanned text containing {PULSE_URL_MARKER}.",
    )
    decode_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the decoded pulse as JSON instead of a summary.",
    )

    return parser


def summarize_waveform(waveform: PulseWaveform) -> str:
    lines = [
        f"Sleep time: {waveform.sleep_time:g} s | Speed factor: {waveform.speed_factor}",
        f"Sections ({len(waveform.sections)}):",
    ]
    for idx, section in enumerate(waveform.sections):
        if isinstance(section.freq, tuple):
            freq_desc = f"{section.freq[0]}-{section.freq[1]} Hz"
        else:
            freq_desc = f"{section.freq} Hz"
        mode = section.freq_mode.value if section.freq_mode is not None else "unset"
        lines.append(
            f"  {idx+1}. {section.section_time:g} s | {freq_desc} ({mode}) | "
            f"{len(section.pulse)} pulses: {list(section.pulse)}"
        )
    return "\n".join(lines)


def load_pulse_records(pulse_qr_dir: Path, max_inflated_bytes: int) -> List[dict]:
    """Decode every pulse image in ``pulse_qr_dir``; images that fail are logged and skipped."""
    records: List[dict] = []
    for image_path in list_pulse_images(pulse_qr_dir):
        Logger.info("Loading pulse QR code: %s", image_path.name)
        try:
            waveform = load_pulse_qr_code(image_path, max_inflated_bytes=max_inflated_bytes)
        except (QRCodeLoadingError, PulseDecodeError) as exc:
            Logger.error("Failed to load pulse QR code %s: %s", image_path.name, exc)
            continue
        records.append(build_pulse_record(pulse_name_from_path(image_path), waveform))
    return records


def generate_command(args: argparse.Namespace) -> int:
    pulse_qr_dir: Path = args.pulse_qr_dir
    if not pulse_qr_dir.is_dir():
        Logger.error("Pulse QR directory not found: %s", pulse_qr_dir)
        return 2

    try:
        settings = get_settings()
        output_path = args.output or settings.output_file
        fmt = args.format or settings.output_format

        records = load_pulse_records(pulse_qr_dir, settings.max_inflated_bytes)
        if not records:
            Logger.warning("No pulse QR code could be decoded in %s", pulse_qr_dir)

        export_pulse_records(records, output_path, fmt=fmt)
        Logger.info("Wrote %d pulse(s) to %s", len(records), output_path)
        return 0
    except Exception as exc:  # pylint: disable=broad-except
        Logger.error("Generate failed: %s", exc)
        if Logger.isEnabledFor(logging.DEBUG):
            Logger.exception("Stack trace")
        return 1


def decode_command(args: argparse.Namespace) -> int:
    source: str = args.source
    try:
        max_inflated_bytes = get_settings().max_inflated_bytes
        if PULSE_URL_MARKER in source:
            waveform = parse_pulse_url(source, max_inflated_bytes=max_inflated_bytes)
        else:
            source_path = Path(source)
            if not source_path.exists():
                Logger.error("QR code image not found: %s", source_path)
                return 2
            waveform = load_pulse_qr_code(source_path, max_inflated_bytes=max_inflated_bytes)
    except Exception as exc:  # pylint: disable=broad-except
        Logger.error("Decode failed: %s", exc)
        if Logger.isEnabledFor(logging.DEBUG):
            Logger.exception("Stack trace")
        return 1

    if args.json:
        print(json.dumps(waveform.to_dict(), indent=4))
    else:
        print(summarize_waveform(waveform))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "generate":
        return generate_command(args)
    if args.command == "decode":
        return decode_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
