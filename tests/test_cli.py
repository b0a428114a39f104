import json

import pytest

from dglab_pulse.cli import build_parser, main


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_decode_url_prints_summary(capsys, pulse_url, header):
    url = pulse_url(f"{header(f13=2, f15=1)}+1,2,3+4")

    assert main(["decode", url]) == 0

    out = capsys.readouterr().out
    assert "Sections (2):" in out
    assert "10-10 Hz (inSection)" in out
    assert "[5, 10, 15]" in out


def test_decode_url_as_json(capsys, pulse_url, header):
    assert main(["decode", "--json", pulse_url(f"{header()}+1,2,3")]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["sections"][0]["pulse"] == [5, 10, 15]


def test_decode_image(capsys, tmp_path, qr_image, pulse_url, header):
    path = qr_image(pulse_url(f"{header()}+1,2,3"), tmp_path / "pulse.png")

    assert main(["decode", str(path), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["speedFactor"] == 1


def test_decode_missing_image(tmp_path):
    assert main(["decode", str(tmp_path / "missing.png")]) == 2


def test_decode_invalid_payload():
    assert main(["decode", "#DGLAB-PULSE#abcd"]) == 1


def test_generate_writes_records_and_skips_failures(tmp_path, qr_image, pulse_url, header, blank_image):
    qr_dir = tmp_path / "qr"
    qr_dir.mkdir()
    qr_image(pulse_url(f"{header()}+1,2,3"), qr_dir / "01-Tide.png")
    qr_image(pulse_url(f"{header(f6=4)}+9"), qr_dir / "02_Press.png")
    (qr_dir / "03-Broken.png").write_bytes(b"broken")
    (qr_dir / "readme.txt").write_text("ignored", encoding="utf-8")
    output = tmp_path / "out" / "pulse.json5"

    assert main(["generate", str(qr_dir), "-o", str(output)]) == 0

    records = json.loads(output.read_text(encoding="utf-8"))
    assert [record["name"] for record in records] == ["Tide", "Press"]
    assert records[1]["pulse"]["sections"][0]["pulse"] == [45, 0, 0, 0]
    assert all(len(record["id"]) == 8 for record in records)


def test_generate_uses_settings_default_output(tmp_path, monkeypatch, qr_image, pulse_url, header):
    qr_dir = tmp_path / "qr"
    qr_dir.mkdir()
    qr_image(pulse_url(f"{header()}+1"), qr_dir / "Wave.png")
    monkeypatch.setenv("DGLAB_PULSE_OUTPUT_FILE", str(tmp_path / "from_env.yaml"))
    monkeypatch.setenv("DGLAB_PULSE_OUTPUT_FORMAT", "yaml")

    assert main(["generate", str(qr_dir)]) == 0
    assert "name: Wave" in (tmp_path / "from_env.yaml").read_text(encoding="utf-8")


def test_generate_missing_directory(tmp_path):
    assert main(["generate", str(tmp_path / "missing")]) == 2


def test_generate_skips_oversized_pulse_count(tmp_path, qr_image, pulse_url, header):
    qr_dir = tmp_path / "qr"
    qr_dir.mkdir()
    qr_image(pulse_url(f"{header(f6=10**20)}+1"), qr_dir / "01-Huge.png")
    qr_image(pulse_url(f"{header()}+1,2,3"), qr_dir / "02-Tide.png")
    output = tmp_path / "pulse.json5"

    assert main(["generate", str(qr_dir), "-o", str(output)]) == 0

    records = json.loads(output.read_text(encoding="utf-8"))
    assert [record["name"] for record in records] == ["Tide"]
