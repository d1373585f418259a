"""pcmwav - Uncompressed PCM WAV codec.

This package decodes RIFF/WAVE files holding 8, 16 or 24-bit linear PCM into
per-channel floating-point sample arrays, and encodes such arrays back into
canonical WAV files.

Example Usage
-------------
>>> from pcmwav import WavFile
>>>
>>> wav = WavFile()
>>> result = wav.load("input.wav")
>>> if not result:
...     print(result.message)
>>> wav.amplify(0.5)  # scale by 1.5
>>> wav.save("louder.wav")
>>>
>>> # Or use the raising API directly
>>> from pcmwav import load_wav, save_wav
>>> buffer = load_wav("input.wav")
>>> buffer.bit_depth = 24
>>> save_wav("input_24bit.wav", buffer)
"""

from pcmwav.format import (
    AudioBuffer,
    ErrorKind,
    FormatDescriptor,
    ValidationError,
    WavError,
    decode_wave,
    encode_wave,
    load_wav,
    save_wav,
    validate_samples,
)
from pcmwav.types import Endianness, WavFileFormat
from pcmwav.wavfile import CodecResult, WavFile

__all__ = [
    # Types
    "AudioBuffer",
    "FormatDescriptor",
    "Endianness",
    "WavFileFormat",
    # Facade
    "WavFile",
    "CodecResult",
    # Reader
    "decode_wave",
    "load_wav",
    # Writer
    "encode_wave",
    "save_wav",
    # Validation
    "validate_samples",
    "ValidationError",
    # Errors
    "ErrorKind",
    "WavError",
]
