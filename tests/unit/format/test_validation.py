"""Unit tests for header and sample validation.

Header checks must run in a fixed order and stop at the first violation, so
several tests below break two fields at once and assert which error wins.
"""

from collections.abc import Callable

import numpy as np
import pytest

from pcmwav.format import (
    AudioBuffer,
    ChunkNotFoundError,
    FormatDescriptor,
    InconsistentHeaderError,
    NotAWaveFileError,
    UnsupportedBitDepthError,
    UnsupportedChannelLayoutError,
    UnsupportedCompressionError,
    ValidationError,
    check_format,
    locate_chunks,
    validate_samples,
)
from pcmwav.format.errors import ErrorKind


def _descriptor(**overrides: int) -> FormatDescriptor:
    fields = {
        "audio_format": 1,
        "num_channels": 2,
        "sample_rate": 48000,
        "bytes_per_second": 192000,
        "bytes_per_block": 4,
        "bit_depth": 16,
    }
    fields.update(overrides)
    return FormatDescriptor(**fields)


class TestLocateChunks:
    """Checks 1 and 2: chunk presence, then RIFF/WAVE identifiers."""

    def test_valid_file(self, wav_bytes: Callable[..., bytes]) -> None:
        locations = locate_chunks(wav_bytes(b"\x00\x00"))
        assert locations.fmt_offset == 12
        assert locations.data_offset == 36

    def test_missing_data_chunk(self) -> None:
        with pytest.raises(ChunkNotFoundError) as exc_info:
            locate_chunks(b"RIFF\x00\x00\x00\x00WAVEfmt ")
        assert exc_info.value.kind == ErrorKind.CHUNK_NOT_FOUND
        assert "data" in str(exc_info.value)

    def test_missing_fmt_chunk(self) -> None:
        with pytest.raises(ChunkNotFoundError):
            locate_chunks(b"RIFF\x00\x00\x00\x00WAVEdata\x00\x00\x00\x00")

    def test_bad_riff_id(self, wav_bytes: Callable[..., bytes]) -> None:
        with pytest.raises(NotAWaveFileError) as exc_info:
            locate_chunks(wav_bytes(b"", riff_id=b"RIFX"))
        assert exc_info.value.field == "riff_id"

    def test_bad_wave_id(self, wav_bytes: Callable[..., bytes]) -> None:
        with pytest.raises(NotAWaveFileError) as exc_info:
            locate_chunks(wav_bytes(b"", wave_id=b"AVI "))
        assert exc_info.value.field == "wave_id"

    def test_missing_chunk_reported_before_bad_riff(self) -> None:
        with pytest.raises(ChunkNotFoundError):
            locate_chunks(b"JUNK\x00\x00\x00\x00WAVEfmt ")


class TestCheckFormat:
    """Checks 3 to 6 on a parsed format descriptor."""

    def test_valid_descriptor(self) -> None:
        check_format(_descriptor())

    @pytest.mark.parametrize("bit_depth", [8, 16, 24])
    def test_supported_bit_depths(self, bit_depth: int) -> None:
        block = bit_depth // 8
        check_format(
            _descriptor(
                num_channels=1,
                sample_rate=8000,
                bytes_per_second=8000 * block,
                bytes_per_block=block,
                bit_depth=bit_depth,
            )
        )

    def test_non_pcm_format(self) -> None:
        with pytest.raises(UnsupportedCompressionError) as exc_info:
            check_format(_descriptor(audio_format=2))
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED_COMPRESSION

    def test_compression_checked_before_channels(self) -> None:
        with pytest.raises(UnsupportedCompressionError):
            check_format(_descriptor(audio_format=3, num_channels=6))

    @pytest.mark.parametrize("num_channels", [0, 3, 6, -1])
    def test_unsupported_channel_count(self, num_channels: int) -> None:
        with pytest.raises(UnsupportedChannelLayoutError):
            check_format(_descriptor(num_channels=num_channels))

    def test_inconsistent_bytes_per_second(self) -> None:
        with pytest.raises(InconsistentHeaderError) as exc_info:
            check_format(_descriptor(bytes_per_second=192001))
        assert exc_info.value.field == "bytes_per_second"

    def test_inconsistent_bytes_per_block(self) -> None:
        with pytest.raises(InconsistentHeaderError) as exc_info:
            check_format(_descriptor(bytes_per_block=2))
        assert exc_info.value.field == "bytes_per_block"

    def test_consistency_checked_before_bit_depth(self) -> None:
        with pytest.raises(InconsistentHeaderError):
            check_format(_descriptor(bit_depth=32))

    @pytest.mark.parametrize("bit_depth", [12, 32])
    def test_unsupported_bit_depth(self, bit_depth: int) -> None:
        descriptor = _descriptor(
            num_channels=1,
            sample_rate=8000,
            bytes_per_second=8000 * bit_depth // 8,
            bytes_per_block=bit_depth // 8,
            bit_depth=bit_depth,
        )
        with pytest.raises(UnsupportedBitDepthError):
            check_format(descriptor)

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(ValidationError):
            check_format(_descriptor(audio_format=0))


class TestValidateSamples:
    """Tests for validate_samples."""

    def test_clean_buffer(self) -> None:
        buffer = AudioBuffer.from_channels([[0.0, 0.5, -0.5], [1.0, -1.0, 0.0]])
        result = validate_samples(buffer)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_nan_is_error(self) -> None:
        buffer = AudioBuffer.from_channels([0.0, np.nan, np.inf])
        result = validate_samples(buffer)
        assert not result.valid
        assert "1 NaN, 1 Inf" in result.errors[0]
        assert "frame 1" in result.errors[0]

    def test_out_of_range_is_warning(self) -> None:
        buffer = AudioBuffer.from_channels([0.0, 1.5])
        result = validate_samples(buffer)
        assert result.valid
        assert len(result.warnings) == 1
        assert "1.5000" in result.warnings[0]

    def test_24bit_full_scale_wrap_warning(self) -> None:
        buffer = AudioBuffer.from_channels([0.0, 1.0], bit_depth=24)
        result = validate_samples(buffer)
        assert result.valid
        assert any("wrap" in warning for warning in result.warnings)

    def test_16bit_full_scale_no_warning(self) -> None:
        buffer = AudioBuffer.from_channels([1.0, -1.0], bit_depth=16)
        assert validate_samples(buffer).warnings == []

    def test_empty_buffer(self) -> None:
        assert validate_samples(AudioBuffer()).valid
