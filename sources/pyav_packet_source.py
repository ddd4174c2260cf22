from pathlib import Path
from typing import BinaryIO, Iterator, Optional

import av

from pipeline.errors import (
    DemuxError,
    NoDefaultTrackError,
    ProbeError,
    SourceOpenError,
)
from pipeline.logging_utils import get_logger
from sources.audio_packet import AudioPacket, TimeBase
from sources.packet_source import PacketSource

log = get_logger(__name__)


class PyAVPacketSource(PacketSource):
    """
    Reads compressed packets from the first audio track of a container
    without decoding them.
    """

    def __init__(self, path: str | Path, format_hint: str | None = None):
        self.path = Path(path)
        self.format_hint = format_hint

        self._file: BinaryIO | None = None
        self._container = None
        self._stream = None
        self._packets: Iterator | None = None
        self._time_base: TimeBase | None = None
        self._finished = False

    # --------------------
    # Lifecycle
    # --------------------

    def open(self) -> None:
        try:
            self._file = open(self.path, "rb")
        except OSError as exc:
            raise SourceOpenError(f"Cannot open {self.path}: {exc}") from exc

        try:
            self._container = av.open(self._file, mode="r", format=self.format_hint)
        except (av.FFmpegError, ValueError) as exc:
            self.close()
            raise ProbeError(f"Error probing format of {self.path}: {exc}") from exc

        audio_streams = self._container.streams.audio
        if not audio_streams:
            self.close()
            raise NoDefaultTrackError(f"No audio track found in {self.path}")

        self._stream = audio_streams[0]
        if self._stream.time_base is not None:
            self._time_base = TimeBase.from_fraction(self._stream.time_base)

        self._packets = self._container.demux(self._stream)
        self._finished = False

        log.debug(
            "opened %s (format: %s, codec: %s)",
            self.path,
            self._container.format.name,
            self._stream.codec_context.name,
        )

    @property
    def time_base(self) -> Optional[TimeBase]:
        return self._time_base

    def next_packet(self) -> Optional[AudioPacket]:
        if self._finished or self._packets is None:
            return None

        while True:
            try:
                packet = next(self._packets)
            except StopIteration:
                self._finished = True
                return None
            except av.FFmpegError as exc:
                raise DemuxError(f"Error reading packet from {self.path}: {exc}") from exc

            # The demuxer ends with an empty flush packet.
            if packet.size == 0:
                continue

            return AudioPacket(
                data=bytes(packet),
                duration_ticks=int(packet.duration or 0),
            )

    def close(self) -> None:
        self._finished = True
        self._packets = None

        if self._container is not None:
            self._container.close()
            self._container = None

        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def is_finished(self) -> bool:
        return self._finished
