from typing import List, Tuple

from pipeline.errors import NoTimeBaseError
from pipeline.logging_utils import get_logger
from sources.audio_packet import AudioPacket, TimeBase
from sources.packet_source import PacketSource

log = get_logger(__name__)


def ingest_packets(source: PacketSource) -> Tuple[List[AudioPacket], TimeBase]:
    """
    Pull every packet from ``source`` until end of stream.

    Opens the source and always closes it, even when a read fails.
    """
    source.open()
    try:
        time_base = source.time_base
        if time_base is None:
            raise NoTimeBaseError("No time base found for the audio track")

        packets: List[AudioPacket] = []
        while True:
            packet = source.next_packet()
            if packet is None:
                break
            packets.append(packet)
    finally:
        source.close()

    log.debug("ingested %d packets", len(packets))
    return packets, time_base
