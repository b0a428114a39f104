from __future__ import annotations

import base64
import gzip
from pathlib import Path

import cv2
import numpy as np
import pytest

from dglab_pulse.settings import reset_settings_cache


URL_PREFIX = "https://example.com/pulse"
MARKER = "#DGLAB-PULSE#"

# freq A sliders, freq B sliders, pulse counts, time sliders, modes,
# section 2/3 flags, sleep, reserved, speed
SIMPLE_HEADER = "0,0,0,0,0,0,3,3,3,0,0,0,1,1,1,0,0,0,0,1"


def make_header(**overrides: int) -> str:
    fields = [int(value) for value in SIMPLE_HEADER.split(",")]
    for key, value in overrides.items():
        fields[int(key.lstrip("f"))] = value
    return ",".join(str(value) for value in fields)


def encode_payload(payload: str) -> str:
    encoded = base64.b64encode(payload.encode("utf-8"))
    return gzip.compress(encoded, mtime=0).hex()


def make_pulse_url(payload: str) -> str:
    return f"{URL_PREFIX}{MARKER}{encode_payload(payload)}"


def write_qr_image(text: str, path: Path, scale: int = 8, border: int = 40) -> Path:
    encoder = cv2.QRCodeEncoder.create()
    modules = encoder.encode(text)
    image = cv2.resize(
        modules,
        (modules.shape[1] * scale, modules.shape[0] * scale),
        interpolation=cv2.INTER_NEAREST,
    )
    image = cv2.copyMakeBorder(
        image, border, border, border, border, cv2.BORDER_CONSTANT, value=255
    )
    assert cv2.imwrite(str(path), image)
    return path


@pytest.fixture
def pulse_url():
    return make_pulse_url


@pytest.fixture
def header():
    return make_header


@pytest.fixture
def qr_image():
    return write_qr_image


@pytest.fixture
def blank_image(tmp_path: Path) -> Path:
    path = tmp_path / "blank.png"
    assert cv2.imwrite(str(path), np.full((200, 200), 255, dtype=np.uint8))
    return path


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    for name in ("MAX_INFLATED_BYTES", "OUTPUT_FILE", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"DGLAB_PULSE_{name}", raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
