from dataclasses import dataclass
from typing import List

from pipeline.logging_utils import get_logger
from pipeline.timeline import Timeline

log = get_logger(__name__)


@dataclass(frozen=True)
class ChunkPlan:
    index: int              # 1-based chunk number
    start_time: float       # seconds from stream start
    end_time: float
    start_packet: int       # first packet index (inclusive)
    end_packet: int         # last packet index (exclusive)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def packet_count(self) -> int:
        return self.end_packet - self.start_packet

    @property
    def packet_range(self) -> range:
        return range(self.start_packet, self.end_packet)


def plan_chunks(timeline: Timeline, target_duration: float) -> List[ChunkPlan]:
    """
    Partition the packets of ``timeline`` into contiguous chunks of roughly
    ``target_duration`` seconds.

    Boundaries fall on packet edges only. A chunk keeps taking packets until
    its cumulative end time reaches or passes the target, so every chunk but
    the last is at least ``target_duration`` long. Every chunk holds at least
    one packet, even when that packet alone is longer than the target. The
    last chunk ends at the stream's total duration.
    """
    if target_duration <= 0:
        raise ValueError("target_duration must be positive")

    packet_count = timeline.packet_count
    plans: List[ChunkPlan] = []

    chunk_start_packet = 0
    chunk_start_time = 0.0

    while chunk_start_packet < packet_count:
        target_end_time = chunk_start_time + target_duration

        chunk_end_packet = chunk_start_packet
        while chunk_end_packet < packet_count and (
            chunk_end_packet == chunk_start_packet
            or timeline.end_of(chunk_end_packet - 1) < target_end_time
        ):
            chunk_end_packet += 1

        if chunk_end_packet == chunk_start_packet:
            chunk_end_packet = chunk_start_packet + 1

        if chunk_end_packet < packet_count:
            chunk_end_time = timeline.end_of(chunk_end_packet - 1)
        else:
            chunk_end_time = timeline.total_duration

        plans.append(
            ChunkPlan(
                index=len(plans) + 1,
                start_time=chunk_start_time,
                end_time=chunk_end_time,
                start_packet=chunk_start_packet,
                end_packet=chunk_end_packet,
            )
        )

        chunk_start_packet = chunk_end_packet
        chunk_start_time = chunk_end_time

    return plans


def summarize_plans(plans: List[ChunkPlan]) -> None:
    log.info("splitting into %d chunks", len(plans))
    for plan in plans:
        log.info(
            "chunk %d duration: %.2f minutes (%.2f seconds), packets: %d",
            plan.index,
            plan.duration / 60.0,
            plan.duration,
            plan.packet_count,
        )
