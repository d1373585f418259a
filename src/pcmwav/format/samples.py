"""Conversion between normalized float samples and on-disk PCM integers.

Decode and encode use different scales:

    ======  ====================  ===================================
    depth   decode                encode
    ======  ====================  ===================================
    8       (b - 128) / 128       round((clamp(s) + 1) / 2 * 255)
    16      i / 32768             round(clamp(s) * 32767)
    24      i / 8388608           round(s * 8388608), no clamp
    ======  ====================  ===================================

The 24-bit encoder does not clamp. A sample at or above +1.0 wraps to the
negative end of the range once truncated to three bytes, so gain-adjusted
audio must be clamped by the caller before it is written at 24 bits.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pcmwav.format.errors import UnsupportedBitDepthError
from pcmwav.types import Endianness

EIGHT_BIT_OFFSET = 128.0
EIGHT_BIT_DECODE_SCALE = 128.0
EIGHT_BIT_ENCODE_SCALE = 255.0
SIXTEEN_BIT_DECODE_SCALE = 32768.0
SIXTEEN_BIT_ENCODE_SCALE = 32767.0
TWENTY_FOUR_BIT_SCALE = 8388608.0  # 2^23

_SIGN_BIT_24 = 0x800000
_MASK_24 = 0xFFFFFF


def clamp(values: ArrayLike, lo: float = -1.0, hi: float = 1.0) -> NDArray[np.float64]:
    """Clamp values into ``[lo, hi]``."""
    return np.minimum(np.maximum(np.asarray(values, dtype=np.float64), lo), hi)


def bytes_per_sample(bit_depth: int) -> int:
    return bit_depth // 8


def quantization_step(bit_depth: int) -> float:
    """Smallest non-zero magnitude a decoded sample can take at ``bit_depth``."""
    if bit_depth == 8:
        return 1.0 / EIGHT_BIT_DECODE_SCALE
    elif bit_depth == 16:
        return 1.0 / SIXTEEN_BIT_DECODE_SCALE
    elif bit_depth == 24:
        return 1.0 / TWENTY_FOUR_BIT_SCALE
    raise UnsupportedBitDepthError(f"Unsupported bit depth: {bit_depth}", field="bit_depth")


# Decoding


def decode_8bit(data: bytes, dtype: DTypeLike = np.float32) -> NDArray[Any]:
    """Decode unsigned 8-bit samples."""
    samples = np.frombuffer(data, dtype=np.uint8).astype(np.float64)
    return ((samples - EIGHT_BIT_OFFSET) / EIGHT_BIT_DECODE_SCALE).astype(dtype)


def decode_16bit(
    data: bytes,
    order: Endianness = Endianness.little,
    dtype: DTypeLike = np.float32,
) -> NDArray[Any]:
    """Decode signed 16-bit samples."""
    samples = np.frombuffer(data, dtype=np.dtype(f"{order.struct_prefix}i2"))
    return (samples.astype(np.float64) / SIXTEEN_BIT_DECODE_SCALE).astype(dtype)


def decode_24bit(
    data: bytes,
    order: Endianness = Endianness.little,
    dtype: DTypeLike = np.float32,
) -> NDArray[Any]:
    """Decode packed signed 24-bit samples.

    Each sample is rebuilt from three bytes and sign-extended when bit 23 is
    set before scaling by 2^23.
    """
    triplets = np.frombuffer(data, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
    if order is Endianness.big:
        triplets = triplets[:, ::-1]

    values = triplets[:, 0] | (triplets[:, 1] << 8) | (triplets[:, 2] << 16)
    values = np.where(values & _SIGN_BIT_24, values - (_MASK_24 + 1), values)

    return (values.astype(np.float64) / TWENTY_FOUR_BIT_SCALE).astype(dtype)


def decode_samples(
    data: bytes,
    bit_depth: int,
    order: Endianness = Endianness.little,
    dtype: DTypeLike = np.float32,
) -> NDArray[Any]:
    """Decode a run of PCM samples at the given bit depth.

    Args:
        data: Raw sample bytes; the length must be a whole number of samples.
        bit_depth: 8, 16 or 24.
        order: Byte order of multi-byte samples (8-bit samples ignore it).
        dtype: Floating-point type of the returned samples.

    Returns:
        A flat array of normalized samples.

    Raises:
        UnsupportedBitDepthError: If ``bit_depth`` is not 8, 16 or 24.
        ValueError: If ``data`` does not hold a whole number of samples.
    """
    if bit_depth not in (8, 16, 24):
        raise UnsupportedBitDepthError(f"Unsupported bit depth: {bit_depth}", field="bit_depth")

    width = bytes_per_sample(bit_depth)
    if len(data) % width != 0:
        raise ValueError(f"{len(data)} bytes is not a whole number of {bit_depth}-bit samples")

    if bit_depth == 8:
        return decode_8bit(data, dtype)
    elif bit_depth == 16:
        return decode_16bit(data, order, dtype)
    return decode_24bit(data, order, dtype)


# Encoding


def encode_8bit(samples: ArrayLike) -> bytes:
    """Encode samples as unsigned 8-bit bytes (clamped)."""
    scaled = (clamp(samples) + 1.0) / 2.0 * EIGHT_BIT_ENCODE_SCALE
    return np.round(scaled).astype(np.uint8).tobytes()


def encode_16bit(samples: ArrayLike, order: Endianness = Endianness.little) -> bytes:
    """Encode samples as signed 16-bit integers (clamped)."""
    scaled = clamp(samples) * SIXTEEN_BIT_ENCODE_SCALE
    return np.round(scaled).astype(np.dtype(f"{order.struct_prefix}i2")).tobytes()


def encode_24bit(samples: ArrayLike, order: Endianness = Endianness.little) -> bytes:
    """Encode samples as packed signed 24-bit integers.

    No clamp is applied: values are scaled by 2^23, rounded and truncated to
    their low three bytes. The truncation is taken modulo 2^24 in floating
    point, so samples of any finite magnitude wrap the same way.
    """
    scaled = np.asarray(samples, dtype=np.float64).ravel() * TWENTY_FOUR_BIT_SCALE
    values = np.mod(np.round(scaled), _MASK_24 + 1).astype(np.int64)

    triplets = np.stack(
        [values & 0xFF, (values >> 8) & 0xFF, (values >> 16) & 0xFF],
        axis=-1,
    ).astype(np.uint8)
    if order is Endianness.big:
        triplets = triplets[:, ::-1]

    return np.ascontiguousarray(triplets).tobytes()


def encode_samples(
    samples: ArrayLike,
    bit_depth: int,
    order: Endianness = Endianness.little,
) -> bytes:
    """Encode samples at the given bit depth.

    Multi-dimensional input is flattened in row-major order, so a
    ``(frames, channels)`` array produces frame-interleaved output.

    Raises:
        UnsupportedBitDepthError: If ``bit_depth`` is not 8, 16 or 24.
    """
    flat = np.asarray(samples, dtype=np.float64).ravel()

    if bit_depth == 8:
        return encode_8bit(flat)
    elif bit_depth == 16:
        return encode_16bit(flat, order)
    elif bit_depth == 24:
        return encode_24bit(flat, order)
    raise UnsupportedBitDepthError(f"Unsupported bit depth: {bit_depth}", field="bit_depth")
