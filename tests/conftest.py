import struct
from collections.abc import Callable

import pytest


def build_wav_bytes(
    samples: bytes,
    *,
    num_channels: int = 1,
    sample_rate: int = 44100,
    bit_depth: int = 16,
    audio_format: int = 1,
    bytes_per_second: int | None = None,
    bytes_per_block: int | None = None,
    data_size: int | None = None,
    riff_id: bytes = b"RIFF",
    wave_id: bytes = b"WAVE",
    extra_chunks: bytes = b"",
) -> bytes:
    """Assemble a WAV file by hand so individual header fields can be broken."""
    if bytes_per_block is None:
        bytes_per_block = num_channels * (bit_depth // 8)
    if bytes_per_second is None:
        bytes_per_second = sample_rate * bytes_per_block
    if data_size is None:
        data_size = len(samples)

    fmt_chunk = b"fmt " + struct.pack(
        "<IHHIIHH",
        16,
        audio_format,
        num_channels,
        sample_rate,
        bytes_per_second,
        bytes_per_block,
        bit_depth,
    )
    data_chunk = b"data" + struct.pack("<I", data_size) + samples
    body = wave_id + fmt_chunk + extra_chunks + data_chunk
    return riff_id + struct.pack("<I", len(body)) + body


@pytest.fixture
def wav_bytes() -> Callable[..., bytes]:
    """Factory for hand-built WAV files."""
    return build_wav_bytes
