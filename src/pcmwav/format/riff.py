"""RIFF/WAV byte-level utilities.

This module locates chunk tags inside a raw byte buffer and reads and writes
the fixed-width integers that make up a WAV header.

Chunk discovery is a plain substring scan over the whole buffer rather than a
walk over chunk sizes. A tag that happens to appear inside sample data can
therefore be matched first; callers that need structural traversal must do
it themselves.
"""

import struct

from pcmwav.format.errors import TruncatedFileError
from pcmwav.types import Endianness, WavFileFormat

# FourCC identifiers
RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

# The format chunk is searched for by its first three bytes
FMT_TAG = b"fmt"

# Audio format codes
WAVE_FORMAT_PCM = 1

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
FMT_CHUNK_BODY_SIZE = 16
WAV_HEADER_SIZE = RIFF_HEADER_SIZE + CHUNK_HEADER_SIZE + FMT_CHUNK_BODY_SIZE + CHUNK_HEADER_SIZE

BytesLike = bytes | bytearray | memoryview


def find_chunk(data: BytesLike, tag: bytes) -> int | None:
    """Find the first occurrence of a chunk tag anywhere in the buffer.

    Args:
        data: Raw file bytes.
        tag: A 3- or 4-byte ASCII tag such as ``b"data"`` or ``b"fmt"``.

    Returns:
        Byte offset of the tag's first byte, or None if it does not occur.

    Raises:
        ValueError: If the tag is not 3 or 4 bytes long.
    """
    if len(tag) not in (3, 4):
        raise ValueError(f"Chunk tag must be 3 or 4 bytes, got {len(tag)}")

    index = bytes(data).find(tag)
    return index if index >= 0 else None


def _check_bounds(data: BytesLike, offset: int, width: int) -> None:
    if offset < 0 or offset + width > len(data):
        raise TruncatedFileError(
            f"Cannot read {width} bytes at offset {offset}: buffer is {len(data)} bytes",
            field=f"offset {offset}",
        )


def read_uint32(data: BytesLike, offset: int, order: Endianness = Endianness.little) -> int:
    """Read an unsigned 32-bit integer.

    Raises:
        TruncatedFileError: If fewer than 4 bytes remain at ``offset``.
    """
    _check_bounds(data, offset, 4)
    return struct.unpack_from(f"{order.struct_prefix}I", data, offset)[0]


def read_int16(data: BytesLike, offset: int, order: Endianness = Endianness.little) -> int:
    """Read a signed 16-bit integer.

    Raises:
        TruncatedFileError: If fewer than 2 bytes remain at ``offset``.
    """
    _check_bounds(data, offset, 2)
    return struct.unpack_from(f"{order.struct_prefix}h", data, offset)[0]


def pack_uint32(value: int, order: Endianness = Endianness.little) -> bytes:
    """Pack the low 32 bits of ``value``."""
    return struct.pack(f"{order.struct_prefix}I", value & 0xFFFFFFFF)


def pack_int16(value: int, order: Endianness = Endianness.little) -> bytes:
    """Pack the low 16 bits of ``value`` as a two's-complement integer."""
    return struct.pack(f"{order.struct_prefix}H", value & 0xFFFF)


def determine_file_format(data: BytesLike) -> WavFileFormat:
    """Classify a raw buffer by its leading four bytes."""
    if bytes(data[:4]) == RIFF_ID:
        return WavFileFormat.WAVE
    return WavFileFormat.ERROR
