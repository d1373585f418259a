from enum import Enum
from typing import Literal, TypeAlias

import numpy as np
from numpy.typing import NDArray

SampleArray: TypeAlias = NDArray[np.floating]
ChannelList: TypeAlias = list[SampleArray]

BitDepth = Literal[8, 16, 24]
SUPPORTED_BIT_DEPTHS: tuple[int, ...] = (8, 16, 24)
SUPPORTED_CHANNEL_COUNTS: tuple[int, ...] = (1, 2)


class Endianness(str, Enum):
    little = "little"
    big = "big"

    @property
    def struct_prefix(self) -> str:
        """Byte-order character for :mod:`struct` and numpy dtype strings."""
        return "<" if self is Endianness.little else ">"


class WavFileFormat(Enum):
    ERROR = "error"
    NOT_LOADED = "not_loaded"
    WAVE = "wave"
