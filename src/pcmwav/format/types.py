"""Python types for decoded audio and WAV format headers.

:class:`AudioBuffer` is the in-memory model the decoder produces and the
encoder consumes. :class:`FormatDescriptor` mirrors the fields of a ``fmt ``
chunk and only lives long enough to be validated or written.
"""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from pcmwav.format.errors import UnsupportedBitDepthError, UnsupportedChannelLayoutError
from pcmwav.format.riff import WAVE_FORMAT_PCM
from pcmwav.types import SUPPORTED_BIT_DEPTHS, SUPPORTED_CHANNEL_COUNTS, ChannelList, SampleArray

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_BIT_DEPTH = 16


@dataclass
class AudioBuffer:
    """Per-channel normalized samples plus the format they are stored in.

    A default-constructed buffer holds no channels and is considered not
    loaded. Channel arrays are owned by the buffer: they are copied into
    ``dtype`` on construction and mutated in place by the gain operations.
    """

    sample_rate: int = DEFAULT_SAMPLE_RATE
    """Frames per second."""

    bit_depth: int = DEFAULT_BIT_DEPTH
    """Bits per sample in the encoded file (8, 16 or 24)."""

    channels: ChannelList = field(default_factory=list)
    """One array of samples per channel, all the same length."""

    dtype: DTypeLike = np.float32
    """Floating-point type of the in-memory samples."""

    def __post_init__(self) -> None:
        self.dtype = np.dtype(self.dtype)
        if not np.issubdtype(self.dtype, np.floating):
            raise TypeError(f"Sample dtype must be floating point, got {self.dtype}")

        if self.bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise UnsupportedBitDepthError(
                f"Bit depth must be one of {SUPPORTED_BIT_DEPTHS}, got {self.bit_depth}",
                field="bit_depth",
            )

        if not 0 <= self.sample_rate <= 0xFFFFFFFF:
            raise ValueError(f"Sample rate must fit in 32 bits, got {self.sample_rate}")

        self.channels = [np.array(channel, dtype=self.dtype).ravel() for channel in self.channels]

        if self.channels and len(self.channels) not in SUPPORTED_CHANNEL_COUNTS:
            raise UnsupportedChannelLayoutError(
                f"Expected mono or stereo audio, got {len(self.channels)} channels",
                field="channels",
            )

        lengths = {len(channel) for channel in self.channels}
        if len(lengths) > 1:
            raise ValueError(f"All channels must have the same length, got {sorted(lengths)}")

    @classmethod
    def from_channels(
        cls,
        channels: ArrayLike,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        bit_depth: int = DEFAULT_BIT_DEPTH,
        dtype: DTypeLike = np.float32,
    ) -> "AudioBuffer":
        """Build a buffer from a ``(channels, frames)`` array or a 1D mono array."""
        array = np.asarray(channels, dtype=np.float64)
        if array.ndim == 1:
            array = array[np.newaxis, :]
        elif array.ndim != 2:
            raise ValueError(f"channels should be 1D or 2D, got shape {array.shape}")

        return cls(
            sample_rate=sample_rate,
            bit_depth=bit_depth,
            channels=list(array),
            dtype=dtype,
        )

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    @property
    def frame_count(self) -> int:
        """Number of samples in each channel."""
        return len(self.channels[0]) if self.channels else 0

    @property
    def duration_seconds(self) -> float:
        if self.sample_rate == 0:
            return 0.0
        return self.frame_count / self.sample_rate

    @property
    def is_loaded(self) -> bool:
        return bool(self.channels)

    def interleaved(self) -> SampleArray:
        """Samples as a ``(frame_count, channel_count)`` array."""
        if not self.channels:
            return np.zeros((0, 0), dtype=self.dtype)
        return np.stack(self.channels, axis=1)

    def amplify(self, factor: float) -> None:
        """Scale every sample by ``1 + factor`` in place. No clamping is applied."""
        for channel in self.channels:
            channel += channel * factor

    def attenuate(self, factor: float) -> None:
        """Scale every sample by ``1 - factor`` in place. No clamping is applied."""
        for channel in self.channels:
            channel -= channel * factor

    def clear(self) -> None:
        self.channels = []

    def replace_with(self, other: "AudioBuffer") -> None:
        """Replace this buffer's format and samples with copies of ``other``'s."""
        self.sample_rate = other.sample_rate
        self.bit_depth = other.bit_depth
        self.dtype = other.dtype
        self.channels = [channel.copy() for channel in other.channels]


@dataclass(frozen=True)
class FormatDescriptor:
    """The fields of a PCM ``fmt `` chunk."""

    audio_format: int
    num_channels: int
    sample_rate: int
    bytes_per_second: int
    bytes_per_block: int
    bit_depth: int

    @property
    def bytes_per_sample(self) -> int:
        return self.bit_depth // 8

    @classmethod
    def for_buffer(cls, buffer: AudioBuffer) -> "FormatDescriptor":
        """Derive the header fields that describe ``buffer`` as linear PCM."""
        num_channels = buffer.channel_count
        return cls(
            audio_format=WAVE_FORMAT_PCM,
            num_channels=num_channels,
            sample_rate=buffer.sample_rate,
            bytes_per_second=(num_channels * buffer.sample_rate * buffer.bit_depth) // 8,
            bytes_per_block=num_channels * (buffer.bit_depth // 8),
            bit_depth=buffer.bit_depth,
        )
