# sources/packet_source.py
from abc import ABC, abstractmethod
from typing import Optional

from sources.audio_packet import AudioPacket, TimeBase


class PacketSource(ABC):
    @abstractmethod
    def open(self) -> None:
        """Open and probe the input, selecting the track to read."""
        pass

    @property
    @abstractmethod
    def time_base(self) -> Optional[TimeBase]:
        """
        Time base of the selected track, or None if the track has none.
        Only valid after open().
        """
        pass

    @abstractmethod
    def next_packet(self) -> Optional[AudioPacket]:
        """
        Return the next packet of the selected track.
        Return None at end of stream. Hard failures raise.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying container and file handle."""
        pass

    @property
    @abstractmethod
    def is_finished(self) -> bool:
        """
        True once end of stream has been reached.
        """
        pass
