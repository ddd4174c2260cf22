# sources/audio_packet.py
from dataclasses import dataclass
from fractions import Fraction


@dataclass(frozen=True)
class TimeBase:
    numerator: int
    denominator: int

    def __post_init__(self):
        if self.denominator == 0:
            raise ValueError("time base denominator must be non-zero")

    @classmethod
    def from_fraction(cls, value: Fraction) -> "TimeBase":
        return cls(numerator=value.numerator, denominator=value.denominator)

    def to_seconds(self, ticks: int) -> float:
        return ticks * self.numerator / self.denominator


@dataclass(frozen=True)
class AudioPacket:
    data: bytes             # raw compressed frame, written verbatim
    duration_ticks: int     # duration in stream time-base units

    @property
    def size(self) -> int:
        return len(self.data)
