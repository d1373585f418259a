"""WAV file writer.

This module encodes an :class:`AudioBuffer` as a canonical 44-byte-header
PCM WAV file: a RIFF header, a 16-byte ``fmt `` chunk and a ``data`` chunk,
with nothing else.
"""

from pathlib import Path

from pcmwav.format.errors import (
    EncodingSizeMismatchError,
    NonFiniteSamplesError,
    UnsupportedBitDepthError,
    UnsupportedChannelLayoutError,
    UnsupportedFormatError,
    WriteFailureError,
)
from pcmwav.format.riff import (
    CHUNK_HEADER_SIZE,
    DATA_ID,
    FMT_CHUNK_BODY_SIZE,
    FMT_ID,
    RIFF_ID,
    WAVE_ID,
    pack_int16,
    pack_uint32,
)
from pcmwav.format.samples import encode_samples
from pcmwav.format.types import AudioBuffer, FormatDescriptor
from pcmwav.format.validation import validate_samples
from pcmwav.types import SUPPORTED_BIT_DEPTHS, SUPPORTED_CHANNEL_COUNTS, WavFileFormat

MAX_RIFF_SIZE = 0xFFFFFFFF


def encode_wave(buffer: AudioBuffer) -> bytes:
    """Encode an audio buffer as a complete WAV file.

    Args:
        buffer: The audio to encode. Its ``bit_depth`` selects the sample
            format; 24-bit samples are not clamped (see
            :mod:`pcmwav.format.samples`).

    Returns:
        The complete WAV file as bytes.

    Raises:
        UnsupportedChannelLayoutError: If the buffer is not mono or stereo.
        UnsupportedBitDepthError: If the bit depth is not 8, 16 or 24.
        NonFiniteSamplesError: If any sample is NaN or infinite.
        EncodingSizeMismatchError: If the channels differ in length, the file
            would not fit in a RIFF container, or the emitted byte count
            disagrees with the header.
    """
    if buffer.channel_count not in SUPPORTED_CHANNEL_COUNTS:
        raise UnsupportedChannelLayoutError(
            f"Can only encode mono or stereo audio, got {buffer.channel_count} channels",
            field="channels",
        )
    if buffer.bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise UnsupportedBitDepthError(
            f"Can only encode 8, 16 or 24-bit audio, got {buffer.bit_depth}",
            field="bit_depth",
        )
    lengths = {len(channel) for channel in buffer.channels}
    if len(lengths) != 1:
        raise EncodingSizeMismatchError(
            f"All channels must have the same length, got {sorted(lengths)}",
            field="channels",
        )

    result = validate_samples(buffer)
    if not result.valid:
        raise NonFiniteSamplesError(f"Sample validation failed: {result.errors}", field="channels")

    descriptor = FormatDescriptor.for_buffer(buffer)
    frame_count = buffer.frame_count

    data_chunk_size = frame_count * descriptor.bytes_per_block
    # "WAVE" + fmt chunk (header and body) + data chunk header + samples
    file_size_in_bytes = 4 + (CHUNK_HEADER_SIZE + FMT_CHUNK_BODY_SIZE) + CHUNK_HEADER_SIZE + data_chunk_size
    if file_size_in_bytes > MAX_RIFF_SIZE:
        raise EncodingSizeMismatchError(
            f"Audio is too long for a WAV file: RIFF size would be {file_size_in_bytes} bytes",
            field="frame_count",
        )

    wav = bytearray()

    # RIFF header
    wav.extend(RIFF_ID)
    wav.extend(pack_uint32(file_size_in_bytes))
    wav.extend(WAVE_ID)

    # fmt chunk
    wav.extend(FMT_ID)
    wav.extend(pack_uint32(FMT_CHUNK_BODY_SIZE))
    wav.extend(pack_int16(descriptor.audio_format))
    wav.extend(pack_int16(descriptor.num_channels))
    wav.extend(pack_uint32(descriptor.sample_rate))
    wav.extend(pack_uint32(descriptor.bytes_per_second))
    wav.extend(pack_int16(descriptor.bytes_per_block))
    wav.extend(pack_int16(descriptor.bit_depth))

    # data chunk
    wav.extend(DATA_ID)
    wav.extend(pack_uint32(data_chunk_size))
    wav.extend(encode_samples(buffer.interleaved(), descriptor.bit_depth))

    expected_data_size = frame_count * buffer.channel_count * (buffer.bit_depth // 8)
    if file_size_in_bytes != len(wav) - CHUNK_HEADER_SIZE or data_chunk_size != expected_data_size:
        raise EncodingSizeMismatchError(
            f"Encoded {len(wav)} bytes but the header declares a RIFF size of "
            f"{file_size_in_bytes} and a data size of {data_chunk_size}",
            field="file_size",
        )

    return bytes(wav)


def save_wav(
    path: Path | str,
    buffer: AudioBuffer,
    file_format: WavFileFormat = WavFileFormat.WAVE,
) -> None:
    """Save an audio buffer to disk.

    The file is encoded completely in memory before anything is written, so
    an encoding failure never leaves a partial file behind.

    Args:
        path: Output file path.
        buffer: The audio to save.
        file_format: Output container; only ``WavFileFormat.WAVE`` is supported.

    Raises:
        UnsupportedFormatError: If ``file_format`` is not WAVE.
        WriteFailureError: If the file cannot be written.
        WavError: Any error raised by :func:`encode_wave`.
    """
    if file_format is not WavFileFormat.WAVE:
        raise UnsupportedFormatError(
            f"Cannot save in format {file_format.name}; only WAVE is supported",
            field="file_format",
        )

    path = Path(path)
    wav_bytes = encode_wave(buffer)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(wav_bytes)
    except OSError as e:
        raise WriteFailureError(f"Couldn't save file to {path}: {e}") from e
