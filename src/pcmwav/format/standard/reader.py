"""WAV file reader.

This module decodes uncompressed PCM WAV data into an :class:`AudioBuffer`.
Decoding never mutates an existing buffer: a fresh buffer is built and
returned only once every check has passed.
"""

from pathlib import Path

import numpy as np
from numpy.typing import DTypeLike

from pcmwav.format.errors import FileUnreadableError, NotAWaveFileError, TruncatedFileError
from pcmwav.format.riff import (
    CHUNK_HEADER_SIZE,
    BytesLike,
    determine_file_format,
    read_int16,
    read_uint32,
)
from pcmwav.format.samples import decode_samples
from pcmwav.format.types import AudioBuffer, FormatDescriptor
from pcmwav.format.validation import check_format, locate_chunks
from pcmwav.types import Endianness, WavFileFormat

# RIFF sizes are 32-bit, so nothing larger can be a well-formed WAV file
MAX_FILE_SIZE_BYTES = 0xFFFFFFFF + 8


def read_format_descriptor(data: BytesLike, fmt_offset: int) -> FormatDescriptor:
    """Read the PCM format fields relative to the ``fmt`` tag at ``fmt_offset``.

    Raises:
        TruncatedFileError: If the buffer ends inside the format chunk.
    """
    f = fmt_offset
    return FormatDescriptor(
        audio_format=read_int16(data, f + 8),
        num_channels=read_int16(data, f + 10),
        sample_rate=read_uint32(data, f + 12),
        bytes_per_second=read_uint32(data, f + 16),
        bytes_per_block=read_int16(data, f + 20),
        bit_depth=read_int16(data, f + 22),
    )


def decode_wave(data: BytesLike, dtype: DTypeLike = np.float32) -> AudioBuffer:
    """Decode a complete WAV file held in memory.

    Args:
        data: Raw file bytes.
        dtype: Floating-point type of the decoded samples.

    Returns:
        A new AudioBuffer with one array per channel.

    Raises:
        NotAWaveFileError: If the data does not start with ``RIFF`` or lacks
            the ``WAVE`` identifier.
        ChunkNotFoundError: If the ``fmt`` or ``data`` chunk is missing.
        TruncatedFileError: If a header field or the declared sample data
            runs past the end of the buffer.
        ValidationError: If the format chunk is unsupported or inconsistent.
    """
    if determine_file_format(data) is not WavFileFormat.WAVE:
        raise NotAWaveFileError("Not a RIFF file", field="riff_id")

    locations = locate_chunks(data)
    descriptor = read_format_descriptor(data, locations.fmt_offset)
    check_format(descriptor)

    data_chunk_size = read_uint32(data, locations.data_offset + 4)
    frame_count = data_chunk_size // descriptor.bytes_per_block

    samples_start = locations.data_offset + CHUNK_HEADER_SIZE
    samples_end = samples_start + frame_count * descriptor.bytes_per_block
    if samples_end > len(data):
        raise TruncatedFileError(
            f"Data chunk declares {frame_count} frames ({samples_end - samples_start} bytes) "
            f"but only {max(len(data) - samples_start, 0)} bytes follow the chunk header",
            field="data_chunk_size",
        )

    flat = decode_samples(
        bytes(data[samples_start:samples_end]),
        descriptor.bit_depth,
        Endianness.little,
        dtype,
    )

    # Samples are interleaved channel-minor: all channels of frame i, then frame i + 1
    frames = flat.reshape(frame_count, descriptor.num_channels)

    return AudioBuffer(
        sample_rate=descriptor.sample_rate,
        bit_depth=descriptor.bit_depth,
        channels=[frames[:, channel] for channel in range(descriptor.num_channels)],
        dtype=dtype,
    )


def load_wav(path: Path | str, dtype: DTypeLike = np.float32) -> AudioBuffer:
    """Load a WAV file from disk.

    Args:
        path: Path to the WAV file.
        dtype: Floating-point type of the decoded samples.

    Returns:
        AudioBuffer containing the decoded audio.

    Raises:
        FileUnreadableError: If the file doesn't exist, can't be read, or is
            larger than any RIFF file can be.
        NotAWaveFileError: If the file doesn't start with ``RIFF``.
        WavError: Any error raised by :func:`decode_wave`.
    """
    path = Path(path)

    try:
        file_size = path.stat().st_size
        if file_size > MAX_FILE_SIZE_BYTES:
            raise FileUnreadableError(
                f"File size ({file_size} bytes) exceeds the RIFF maximum of "
                f"{MAX_FILE_SIZE_BYTES} bytes: {path}"
            )
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise FileUnreadableError(f"File doesn't exist: {path}") from e
    except OSError as e:
        raise FileUnreadableError(f"Cannot read file: {path}") from e

    return decode_wave(data, dtype=dtype)
