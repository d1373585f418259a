"""Result-returning codec facade.

:class:`WavFile` wraps an :class:`AudioBuffer` with ``load``/``save`` methods
that report failures as a :class:`CodecResult` instead of raising, and never
print anything. A failed load leaves the buffer exactly as it was.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import DTypeLike

from pcmwav.format.errors import ErrorKind, WavError
from pcmwav.format.riff import BytesLike
from pcmwav.format.standard.reader import decode_wave, load_wav
from pcmwav.format.standard.writer import encode_wave, save_wav
from pcmwav.format.types import AudioBuffer
from pcmwav.types import WavFileFormat


@dataclass(frozen=True)
class CodecResult:
    """Outcome of a load or save."""

    error: WavError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        """Diagnostic text for the caller to surface; empty on success."""
        return self.error.message if self.error is not None else ""

    def __bool__(self) -> bool:
        return self.ok


class WavFile:
    """An audio buffer with load/save operations.

    ``load``, ``decode`` and ``save`` report codec failures as a
    :class:`CodecResult`. ``encode`` is the one method that raises: it
    returns the encoded bytes, so failures surface as a :class:`WavError`.
    """

    def __init__(self, dtype: DTypeLike = np.float32) -> None:
        self.buffer = AudioBuffer(dtype=dtype)
        self.file_format = WavFileFormat.NOT_LOADED

    @property
    def sample_rate(self) -> int:
        return self.buffer.sample_rate

    @property
    def bit_depth(self) -> int:
        return self.buffer.bit_depth

    @property
    def channel_count(self) -> int:
        return self.buffer.channel_count

    @property
    def frame_count(self) -> int:
        return self.buffer.frame_count

    @property
    def duration_seconds(self) -> float:
        return self.buffer.duration_seconds

    def load(self, path: Path | str) -> CodecResult:
        """Replace the buffer with the contents of a WAV file."""
        try:
            decoded = load_wav(path, dtype=self.buffer.dtype)
        except WavError as e:
            return CodecResult(error=e)
        return self._accept(decoded)

    def decode(self, data: BytesLike) -> CodecResult:
        """Replace the buffer with WAV data already in memory."""
        try:
            decoded = decode_wave(data, dtype=self.buffer.dtype)
        except WavError as e:
            return CodecResult(error=e)
        return self._accept(decoded)

    def save(
        self,
        path: Path | str,
        file_format: WavFileFormat = WavFileFormat.WAVE,
    ) -> CodecResult:
        """Write the buffer to ``path``; nothing is written on failure."""
        try:
            save_wav(path, self.buffer, file_format)
        except WavError as e:
            return CodecResult(error=e)
        return CodecResult()

    def encode(self) -> bytes:
        """Encode the buffer as WAV bytes.

        Raises:
            WavError: If the buffer cannot be encoded.
        """
        return encode_wave(self.buffer)

    def amplify(self, factor: float) -> None:
        self.buffer.amplify(factor)

    def attenuate(self, factor: float) -> None:
        self.buffer.attenuate(factor)

    def _accept(self, decoded: AudioBuffer) -> CodecResult:
        self.buffer.clear()
        self.buffer.replace_with(decoded)
        self.file_format = WavFileFormat.WAVE
        return CodecResult()
