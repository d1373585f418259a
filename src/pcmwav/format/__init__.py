"""PCM WAV format module.

This module provides functionality for reading and writing uncompressed PCM
audio in the RIFF/WAVE container.

Format Overview
---------------
Files are written with the canonical 44-byte header:

    +----------------------------------------+
    | RIFF Header ("WAVE")          12 bytes |
    +----------------------------------------+
    | fmt  chunk (PCM format)       24 bytes |
    |   - channels (1 or 2)                  |
    |   - sample rate, byte rate             |
    |   - block align, bit depth             |
    +----------------------------------------+
    | data chunk header              8 bytes |
    +----------------------------------------+
    | samples (8/16/24-bit, little-endian)   |
    |   - frame-major, channel-minor         |
    +----------------------------------------+

When reading, the ``fmt`` and ``data`` chunks are located by tag search, so
files with additional chunks are accepted.

Example Usage
-------------
>>> import numpy as np
>>> from pcmwav.format import AudioBuffer, load_wav, save_wav
>>> tone = np.sin(2 * np.pi * 440 * np.arange(44100) / 44100)
>>> save_wav("tone.wav", AudioBuffer.from_channels(tone, bit_depth=24))
>>> buffer = load_wav("tone.wav")
>>> print(buffer.channel_count, buffer.frame_count)
"""

from pcmwav.format.errors import (
    ChunkNotFoundError,
    EncodingSizeMismatchError,
    ErrorKind,
    FileUnreadableError,
    InconsistentHeaderError,
    NonFiniteSamplesError,
    NotAWaveFileError,
    RiffError,
    TruncatedFileError,
    UnsupportedBitDepthError,
    UnsupportedChannelLayoutError,
    UnsupportedCompressionError,
    UnsupportedFormatError,
    ValidationError,
    WavError,
    WriteFailureError,
)
from pcmwav.format.standard.reader import decode_wave, load_wav
from pcmwav.format.standard.writer import encode_wave, save_wav
from pcmwav.format.types import AudioBuffer, FormatDescriptor
from pcmwav.format.validation import (
    ValidationResult,
    check_format,
    locate_chunks,
    validate_samples,
)

__all__ = [
    # Types
    "AudioBuffer",
    "FormatDescriptor",
    # Reader
    "decode_wave",
    "load_wav",
    # Writer
    "encode_wave",
    "save_wav",
    # Validation
    "ValidationResult",
    "check_format",
    "locate_chunks",
    "validate_samples",
    # Errors
    "ErrorKind",
    "WavError",
    "FileUnreadableError",
    "RiffError",
    "NotAWaveFileError",
    "ChunkNotFoundError",
    "TruncatedFileError",
    "ValidationError",
    "UnsupportedCompressionError",
    "UnsupportedChannelLayoutError",
    "InconsistentHeaderError",
    "UnsupportedBitDepthError",
    "NonFiniteSamplesError",
    "EncodingSizeMismatchError",
    "WriteFailureError",
    "UnsupportedFormatError",
]
