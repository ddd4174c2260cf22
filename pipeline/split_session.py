from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pipeline.chunk_planner import plan_chunks, summarize_plans
from pipeline.chunk_writer import WrittenChunk, prepare_output_dir, write_chunks
from pipeline.errors import TagWriteWarning
from pipeline.logging_utils import get_logger
from pipeline.packet_ingest import ingest_packets
from pipeline.split_config import SplitConfig
from pipeline.timeline import build_timeline
from sources.packet_source import PacketSource
from sources.pyav_packet_source import PyAVPacketSource
from tags.tag_adapter import ChunkTagger, read_source_tag

log = get_logger(__name__)


@dataclass
class SplitResult:
    chunk_count: int
    total_duration: float
    output_files: List[Path]
    chunks: List[WrittenChunk] = field(default_factory=list)
    tag_warnings: List[TagWriteWarning] = field(default_factory=list)


class SplitSession:
    def __init__(
        self,
        config: SplitConfig,
        source: PacketSource,
        tagger: Optional[ChunkTagger] = None,
    ):
        self.config = config
        self.source = source
        self.tagger = tagger

    def run(self) -> SplitResult:
        """
        Split the source into chunk files.

        Stages run strictly in order: output directory setup, packet
        ingest, timeline, planning, then writing and tagging.
        """
        cfg = self.config
        log.info("processing file: %s", cfg.input_path)
        log.info(
            "target chunk duration: %.0f seconds (%.2f minutes)",
            cfg.chunk_seconds,
            cfg.chunk_seconds / 60.0,
        )

        output_dir = prepare_output_dir(cfg.output_dir)

        log.info("first pass: reading packets and calculating timestamps...")
        packets, time_base = ingest_packets(self.source)
        timeline = build_timeline([p.duration_ticks for p in packets], time_base)
        log.info(
            "found %d packets, total duration: %.2f seconds (%.2f minutes)",
            timeline.packet_count,
            timeline.total_duration,
            timeline.total_duration / 60.0,
        )

        log.info("second pass: determining chunk boundaries...")
        plans = plan_chunks(timeline, cfg.chunk_seconds)
        summarize_plans(plans)

        written = write_chunks(
            plans,
            packets,
            output_dir=output_dir,
            prefix=cfg.prefix,
            extension=cfg.output_extension,
            tagger=self.tagger,
            workers=cfg.workers,
            show_progress=cfg.show_progress,
        )

        log.info("split %s into %d chunks in %s", cfg.input_path.name, len(written), output_dir)

        return SplitResult(
            chunk_count=len(written),
            total_duration=timeline.total_duration,
            output_files=[chunk.path for chunk in written],
            chunks=written,
            tag_warnings=self.tagger.warnings if self.tagger is not None else [],
        )


def split_file(config: SplitConfig) -> SplitResult:
    """Split ``config.input_path`` using PyAV for demuxing and its ID3 tag for metadata."""
    source = PyAVPacketSource(config.input_path, format_hint=config.format_hint)

    tagger = None
    if config.input_path.exists():
        source_tag = read_source_tag(config.input_path)
        if source_tag is not None:
            tagger = ChunkTagger(source_tag, version=config.tag_version)

    session = SplitSession(config=config, source=source, tagger=tagger)
    return session.run()
