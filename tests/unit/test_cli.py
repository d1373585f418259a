"""Unit tests for pcmwav.cli module."""

import struct
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from pcmwav.cli.commands import app
from pcmwav.format import load_wav


@pytest.fixture
def mono_file(tmp_path: Path, wav_bytes: Callable[..., bytes]) -> Path:
    path = tmp_path / "mono.wav"
    path.write_bytes(wav_bytes(struct.pack("<4h", 0, 8192, -8192, 16384), sample_rate=48000))
    return path


class TestCliInfo:
    def test_info_valid_file(self, mono_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["info", str(mono_file)]) == 0

        captured = capsys.readouterr()
        assert "48000 Hz" in captured.out
        assert "16-bit" in captured.out
        assert "mono" in captured.out
        assert "peak=0.5000" in captured.out

    def test_info_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["info", str(tmp_path / "missing.wav")]) == 1
        assert "Error:" in capsys.readouterr().out


class TestCliValidate:
    def test_valid_file(self, mono_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["validate", str(mono_file)]) == 0
        assert "[PASS]" in capsys.readouterr().out

    def test_invalid_file(
        self, tmp_path: Path, wav_bytes: Callable[..., bytes], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "alaw.wav"
        path.write_bytes(wav_bytes(b"\x00\x00", audio_format=6))

        assert app(["validate", str(path)]) == 1
        output = capsys.readouterr().out
        assert "[FAIL]" in output
        assert "unsupported_compression" in output

    def test_json_output(
        self, tmp_path: Path, wav_bytes: Callable[..., bytes], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "bad.wav"
        path.write_bytes(wav_bytes(b"\x00\x00", bytes_per_block=3))

        assert app(["validate", str(path), "--json"]) == 1
        output = capsys.readouterr().out
        assert '"valid": false' in output
        assert "inconsistent_header" in output

    def test_trailing_bytes_warn(
        self, tmp_path: Path, wav_bytes: Callable[..., bytes], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "trailing.wav"
        path.write_bytes(wav_bytes(b"\x00\x00") + b"\x00\x00")

        assert app(["validate", str(path)]) == 0
        output = capsys.readouterr().out
        assert "[WARN]" in output
        assert "2 bytes follow the sample data" in output

        assert app(["validate", str(path), "--strict"]) == 1

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["validate", str(tmp_path / "missing.wav")]) == 1
        assert "Cannot read file" in capsys.readouterr().out


class TestCliGain:
    def test_amplify(self, tmp_path: Path, mono_file: Path) -> None:
        output_path = tmp_path / "louder.wav"

        assert app(["gain", str(mono_file), str(output_path), "--amplify", "1.0"]) == 0

        buffer = load_wav(output_path)
        np.testing.assert_allclose(buffer.channels[0], [0.0, 0.5, -0.5, 1.0], atol=1 / 32768)

    def test_attenuate(self, tmp_path: Path, mono_file: Path) -> None:
        output_path = tmp_path / "quieter.wav"

        assert app(["gain", str(mono_file), str(output_path), "--attenuate", "0.5"]) == 0

        buffer = load_wav(output_path)
        np.testing.assert_allclose(buffer.channels[0], [0.0, 0.125, -0.125, 0.25], atol=1 / 32768)

    def test_requires_a_factor(
        self, tmp_path: Path, mono_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        output_path = tmp_path / "out.wav"
        assert app(["gain", str(mono_file), str(output_path)]) == 1
        assert "--amplify" in capsys.readouterr().out
        assert not output_path.exists()

    def test_negative_factor_rejected(self, tmp_path: Path, mono_file: Path) -> None:
        output_path = tmp_path / "out.wav"
        with pytest.raises(SystemExit):
            app(["gain", str(mono_file), str(output_path), "--amplify=-0.5"])
        assert not output_path.exists()

    def test_clamp_24bit(self, tmp_path: Path, wav_bytes: Callable[..., bytes]) -> None:
        """Without --clamp a 24-bit sample pushed past full scale would wrap negative."""
        source = tmp_path / "hot.wav"
        source.write_bytes(wav_bytes(bytes([0x00, 0x00, 0x60]), bit_depth=24))
        output_path = tmp_path / "clamped.wav"

        assert app(["gain", str(source), str(output_path), "--amplify", "1.0", "--clamp"]) == 0

        buffer = load_wav(output_path)
        assert buffer.channels[0][0] > 0.99


class TestCliConvert:
    def test_16_to_24bit(self, tmp_path: Path, mono_file: Path) -> None:
        output_path = tmp_path / "out24.wav"

        assert app(["convert", str(mono_file), str(output_path), "--bit-depth", "24"]) == 0

        buffer = load_wav(output_path)
        assert buffer.bit_depth == 24
        assert buffer.sample_rate == 48000
        np.testing.assert_allclose(buffer.channels[0], [0.0, 0.25, -0.25, 0.5], atol=1e-6)

    def test_16_to_8bit_with_sample_rate(self, tmp_path: Path, mono_file: Path) -> None:
        output_path = tmp_path / "out8.wav"

        assert (
            app(
                [
                    "convert",
                    str(mono_file),
                    str(output_path),
                    "--bit-depth",
                    "8",
                    "--sample-rate",
                    "22050",
                ]
            )
            == 0
        )

        buffer = load_wav(output_path)
        assert buffer.bit_depth == 8
        assert buffer.sample_rate == 22050
        assert output_path.stat().st_size == 44 + 4

    def test_unsupported_bit_depth(self, tmp_path: Path, mono_file: Path) -> None:
        output_path = tmp_path / "out32.wav"
        with pytest.raises(SystemExit):
            app(["convert", str(mono_file), str(output_path), "--bit-depth", "32"])
        assert not output_path.exists()
