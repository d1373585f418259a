"""Validation of WAV headers and sample data.

Header checks run in a fixed order and stop at the first violation:

1. ``data`` and ``fmt`` tags are present
2. the file starts with ``RIFF`` and carries ``WAVE`` at offset 8
3. the audio format is linear PCM
4. the file is mono or stereo
5. byte rate and block align agree with channels, rate and bit depth
6. the bit depth is 8, 16 or 24

Checks 1-2 need only the raw buffer (:func:`locate_chunks`); checks 3-6
operate on a parsed :class:`FormatDescriptor` (:func:`check_format`).
"""

from dataclasses import dataclass

import numpy as np

from pcmwav.format.errors import (
    ChunkNotFoundError,
    InconsistentHeaderError,
    NotAWaveFileError,
    UnsupportedBitDepthError,
    UnsupportedChannelLayoutError,
    UnsupportedCompressionError,
)
from pcmwav.format.riff import (
    DATA_ID,
    FMT_TAG,
    RIFF_ID,
    WAVE_FORMAT_PCM,
    WAVE_ID,
    BytesLike,
    find_chunk,
)
from pcmwav.format.samples import TWENTY_FOUR_BIT_SCALE
from pcmwav.format.types import AudioBuffer, FormatDescriptor
from pcmwav.types import SUPPORTED_BIT_DEPTHS, SUPPORTED_CHANNEL_COUNTS


@dataclass(frozen=True)
class ChunkLocations:
    """Byte offsets of the chunk tags found in a buffer."""

    fmt_offset: int
    data_offset: int


@dataclass
class ValidationResult:
    """Result of validation with optional warnings."""

    valid: bool
    errors: list[str]
    warnings: list[str]

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def failure(cls, errors: list[str], warnings: list[str] | None = None) -> "ValidationResult":
        """Create a failed validation result."""
        return cls(valid=False, errors=errors, warnings=warnings or [])


def locate_chunks(data: BytesLike) -> ChunkLocations:
    """Find the format and data chunks and check the RIFF/WAVE identifiers.

    Args:
        data: Raw file bytes.

    Returns:
        ChunkLocations with the offsets of the ``fmt`` and ``data`` tags.

    Raises:
        ChunkNotFoundError: If either tag is missing.
        NotAWaveFileError: If the RIFF or WAVE identifier is wrong.
    """
    data_offset = find_chunk(data, DATA_ID)
    fmt_offset = find_chunk(data, FMT_TAG)
    if data_offset is None or fmt_offset is None:
        missing = [name for name, offset in (("fmt", fmt_offset), ("data", data_offset)) if offset is None]
        raise ChunkNotFoundError(
            f"This doesn't seem to be a valid WAV file: missing {' and '.join(missing)} chunk",
            field="chunks",
        )

    if bytes(data[0:4]) != RIFF_ID:
        raise NotAWaveFileError("Not a RIFF file", field="riff_id")

    if bytes(data[8:12]) != WAVE_ID:
        raise NotAWaveFileError("Not a WAVE file", field="wave_id")

    return ChunkLocations(fmt_offset=fmt_offset, data_offset=data_offset)


def check_format(descriptor: FormatDescriptor) -> None:
    """Check a format descriptor for a supported, self-consistent PCM layout.

    Raises:
        UnsupportedCompressionError: If the audio format is not linear PCM.
        UnsupportedChannelLayoutError: If the file is neither mono nor stereo.
        InconsistentHeaderError: If byte rate or block align disagree with the
            other fields.
        UnsupportedBitDepthError: If the bit depth is not 8, 16 or 24.
    """
    if descriptor.audio_format != WAVE_FORMAT_PCM:
        raise UnsupportedCompressionError(
            f"Compressed WAV files are not supported (audio format {descriptor.audio_format})",
            field="audio_format",
        )

    if descriptor.num_channels not in SUPPORTED_CHANNEL_COUNTS:
        raise UnsupportedChannelLayoutError(
            f"WAV file is neither mono nor stereo ({descriptor.num_channels} channels)",
            field="num_channels",
        )

    expected_bytes_per_second = (
        descriptor.num_channels * descriptor.sample_rate * descriptor.bit_depth
    ) // 8
    expected_bytes_per_block = descriptor.num_channels * descriptor.bytes_per_sample
    if descriptor.bytes_per_second != expected_bytes_per_second:
        raise InconsistentHeaderError(
            f"Header is inconsistent: bytes_per_second is {descriptor.bytes_per_second}, "
            f"expected {expected_bytes_per_second}",
            field="bytes_per_second",
        )
    if descriptor.bytes_per_block != expected_bytes_per_block:
        raise InconsistentHeaderError(
            f"Header is inconsistent: bytes_per_block is {descriptor.bytes_per_block}, "
            f"expected {expected_bytes_per_block}",
            field="bytes_per_block",
        )

    if descriptor.bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise UnsupportedBitDepthError(
            f"Bit depth must be 8, 16 or 24, got {descriptor.bit_depth}",
            field="bit_depth",
        )


def validate_samples(buffer: AudioBuffer) -> ValidationResult:
    """Validate sample values before encoding.

    This validates:
    - Samples are finite (no NaN/Inf)
    - Samples lie in [-1, 1] (warning only; 8 and 16-bit encoding clamps)
    - 24-bit samples will not wrap around at positive or negative full scale

    Args:
        buffer: The audio to check.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for i, channel in enumerate(buffer.channels):
        finite = np.isfinite(channel)
        if not np.all(finite):
            nan_count = int(np.sum(np.isnan(channel)))
            inf_count = int(np.sum(np.isinf(channel)))
            first_bad_idx = int(np.flatnonzero(~finite)[0])
            errors.append(
                f"Channel {i}: contains non-finite values ({nan_count} NaN, {inf_count} Inf), "
                f"first at frame {first_bad_idx}"
            )
            continue

        if channel.size == 0:
            continue

        max_abs = float(np.max(np.abs(channel)))
        if max_abs > 1.0:
            warnings.append(f"Channel {i}: samples exceed [-1, 1] range, max |sample| = {max_abs:.4f}")

        if buffer.bit_depth == 24:
            scaled = np.round(channel.astype(np.float64) * TWENTY_FOUR_BIT_SCALE)
            wrapped = int(np.sum((scaled >= TWENTY_FOUR_BIT_SCALE) | (scaled < -TWENTY_FOUR_BIT_SCALE)))
            if wrapped:
                warnings.append(
                    f"Channel {i}: {wrapped} samples are outside the 24-bit range and will wrap; "
                    "clamp before encoding"
                )

    if errors:
        return ValidationResult.failure(errors, warnings)
    return ValidationResult.success(warnings)
