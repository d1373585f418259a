"""Standard WAV reader and writer.

This subpackage decodes and encodes uncompressed PCM audio stored in the
RIFF/WAVE container.
"""

from pcmwav.format.standard.reader import decode_wave, load_wav, read_format_descriptor
from pcmwav.format.standard.writer import encode_wave, save_wav

__all__ = [
    "decode_wave",
    "load_wav",
    "read_format_descriptor",
    "encode_wave",
    "save_wav",
]
