import base64
import gzip

import pytest

from dglab_pulse.core.errors import DecompressionError, InvalidFormatError
from dglab_pulse.core.payload import split_payload, unwrap_payload


def test_unwrap_payload_recovers_plaintext(pulse_url):
    payload = "0,0,0,0,0,0,3,3,3,0,0,0,1,1,1,0,0,0,0,1+1,2,3"

    assert unwrap_payload(pulse_url(payload)) == payload


def test_unwrap_payload_is_deterministic(pulse_url):
    url = pulse_url("a,b+c")

    assert unwrap_payload(url) == unwrap_payload(url) == "a,b+c"


def test_unwrap_payload_accepts_unicode(pulse_url):
    assert unwrap_payload(pulse_url("潮汐+1")) == "潮汐+1"


def test_unwrap_payload_without_marker_fails():
    with pytest.raises(InvalidFormatError):
        unwrap_payload("https://example.com/pulse#OTHER#1f8b")


def test_unwrap_payload_stops_at_repeated_marker(pulse_url):
    url = pulse_url("a,b+c") + "#DGLAB-PULSE#trailing"

    assert unwrap_payload(url) == "a,b+c"


def test_unwrap_payload_rejects_non_hex():
    with pytest.raises(InvalidFormatError):
        unwrap_payload("#DGLAB-PULSE#zz12")


def test_unwrap_payload_rejects_malformed_gzip():
    with pytest.raises(DecompressionError):
        unwrap_payload("#DGLAB-PULSE#" + b"not a gzip stream".hex())


def test_unwrap_payload_rejects_truncated_gzip():
    compressed = gzip.compress(base64.b64encode(b"1,2,3+4" * 50))

    with pytest.raises(DecompressionError):
        unwrap_payload("#DGLAB-PULSE#" + compressed[: len(compressed) // 2].hex())


def test_unwrap_payload_rejects_empty_hex():
    with pytest.raises(DecompressionError):
        unwrap_payload("#DGLAB-PULSE#")


def test_unwrap_payload_enforces_inflated_size_limit(pulse_url):
    url = pulse_url("0" * 4096)

    with pytest.raises(InvalidFormatError, match="exceeds"):
        unwrap_payload(url, max_inflated_bytes=1024)


def test_unwrap_payload_tolerates_missing_base64_padding():
    encoded = base64.b64encode(b"1,2+3").rstrip(b"=")
    url = "#DGLAB-PULSE#" + gzip.compress(encoded).hex()

    assert unwrap_payload(url) == "1,2+3"


def test_unwrap_payload_rejects_invalid_utf8():
    encoded = base64.b64encode(b"\xff\xfe+1")
    url = "#DGLAB-PULSE#" + gzip.compress(encoded).hex()

    with pytest.raises(InvalidFormatError):
        unwrap_payload(url)


def test_split_payload_header_and_sections():
    header, sections = split_payload("h+s1+s2+s3")

    assert header == "h"
    assert sections == ["s1", "s2", "s3"]


def test_split_payload_ignores_extra_chunks():
    _, sections = split_payload("h+s1+s2+s3+s4")

    assert sections == ["s1", "s2", "s3"]


def test_split_payload_requires_a_section():
    with pytest.raises(InvalidFormatError):
        split_payload("0,0,0")
