"""Error types raised by the WAV codec.

Every failure the codec can report is a subclass of :class:`WavError` and
carries an :class:`ErrorKind` so callers can branch on the category without
matching on message text. Container-level problems derive from
:class:`RiffError`; header and sample checks derive from
:class:`ValidationError`.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Category of a codec failure."""

    FILE_UNREADABLE = "file_unreadable"
    NOT_A_WAVE_FILE = "not_a_wave_file"
    CHUNK_NOT_FOUND = "chunk_not_found"
    TRUNCATED_FILE = "truncated_file"
    UNSUPPORTED_COMPRESSION = "unsupported_compression"
    UNSUPPORTED_CHANNEL_LAYOUT = "unsupported_channel_layout"
    INCONSISTENT_HEADER = "inconsistent_header"
    UNSUPPORTED_BIT_DEPTH = "unsupported_bit_depth"
    NON_FINITE_SAMPLES = "non_finite_samples"
    ENCODING_SIZE_MISMATCH = "encoding_size_mismatch"
    WRITE_FAILURE = "write_failure"
    UNSUPPORTED_FORMAT = "unsupported_format"


class WavError(Exception):
    """Base class for all codec errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)

    @property
    def message(self) -> str:
        """Human-readable description of the failure."""
        return str(self)


class FileUnreadableError(WavError):
    """The file could not be opened or read."""

    kind = ErrorKind.FILE_UNREADABLE


class RiffError(WavError):
    """Error locating or reading RIFF container structure."""


class NotAWaveFileError(RiffError):
    kind = ErrorKind.NOT_A_WAVE_FILE


class ChunkNotFoundError(RiffError):
    kind = ErrorKind.CHUNK_NOT_FOUND


class TruncatedFileError(RiffError):
    """A read would run past the end of the buffer."""

    kind = ErrorKind.TRUNCATED_FILE


class ValidationError(WavError):
    """A header field or sample value failed validation."""


class UnsupportedCompressionError(ValidationError):
    kind = ErrorKind.UNSUPPORTED_COMPRESSION


class UnsupportedChannelLayoutError(ValidationError):
    kind = ErrorKind.UNSUPPORTED_CHANNEL_LAYOUT


class InconsistentHeaderError(ValidationError):
    kind = ErrorKind.INCONSISTENT_HEADER


class UnsupportedBitDepthError(ValidationError):
    kind = ErrorKind.UNSUPPORTED_BIT_DEPTH


class NonFiniteSamplesError(ValidationError):
    kind = ErrorKind.NON_FINITE_SAMPLES


class EncodingSizeMismatchError(WavError):
    """The encoded byte count disagrees with the sizes written in the header."""

    kind = ErrorKind.ENCODING_SIZE_MISMATCH


class WriteFailureError(WavError):
    kind = ErrorKind.WRITE_FAILURE


class UnsupportedFormatError(WavError):
    """A save format other than WAVE was requested."""

    kind = ErrorKind.UNSUPPORTED_FORMAT
