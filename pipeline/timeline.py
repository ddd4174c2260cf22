from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from pipeline.errors import EmptyStreamError, NoTimeBaseError
from sources.audio_packet import TimeBase


@dataclass(frozen=True)
class Timeline:
    ends: np.ndarray        # cumulative end time (seconds) of each packet
    total_duration: float

    @property
    def packet_count(self) -> int:
        return int(self.ends.shape[0])

    def end_of(self, packet_index: int) -> float:
        return float(self.ends[packet_index])


def build_timeline(
    durations: Sequence[int],
    time_base: Optional[TimeBase],
) -> Timeline:
    """
    Convert per-packet durations (ticks) into cumulative end times.

    Entry i is the summed duration of packets 0..=i in seconds. Float
    rounding accumulates over long streams; that drift is accepted.
    """
    if time_base is None:
        raise NoTimeBaseError("No time base found for the audio track")
    if len(durations) == 0:
        raise EmptyStreamError("No audio packets found")

    ticks = np.asarray(durations, dtype=np.float64)
    seconds = ticks * time_base.numerator / time_base.denominator
    ends = np.cumsum(seconds)
    ends.setflags(write=False)

    return Timeline(ends=ends, total_duration=float(ends[-1]))
