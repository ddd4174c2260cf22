from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

from pipeline.chunk_planner import ChunkPlan
from pipeline.errors import ChunkWriteError, OutputDirectoryError
from pipeline.logging_utils import get_logger
from sources.audio_packet import AudioPacket
from tags.tag_adapter import ChunkTagger

log = get_logger(__name__)


@dataclass(frozen=True)
class WrittenChunk:
    plan: ChunkPlan
    path: Path
    size_bytes: int


def chunk_filename(prefix: str, index: int, extension: str) -> str:
    return f"{prefix}_{index:03d}.{extension}"


def prepare_output_dir(output_dir: Path) -> Path:
    """Create ``output_dir`` if needed. An existing directory is fine."""
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(f"Cannot create output directory {output_dir}: {exc}") from exc
    return output_dir


def write_chunk(plan: ChunkPlan, packets: Sequence[AudioPacket], path: Path) -> int:
    """Write the payloads of ``plan``'s packets to ``path``, back to back."""
    written = 0
    try:
        with open(path, "wb") as f:
            for packet_idx in plan.packet_range:
                data = packets[packet_idx].data
                f.write(data)
                written += len(data)
            f.flush()
    except OSError as exc:
        raise ChunkWriteError(f"Failed to write chunk {plan.index} to {path}: {exc}") from exc
    return written


def write_chunks(
    plans: Sequence[ChunkPlan],
    packets: Sequence[AudioPacket],
    output_dir: Path,
    prefix: str,
    extension: str,
    tagger: Optional[ChunkTagger] = None,
    workers: int = 1,
    show_progress: bool = True,
) -> List[WrittenChunk]:
    """
    Write one file per plan into ``output_dir`` and tag it.

    ``output_dir`` must already exist. With ``workers > 1`` chunks are
    written concurrently; packets are only read. The first write failure
    aborts the remaining chunks; files already written are left in place.
    """
    total = len(plans)
    output_dir = Path(output_dir)

    def _write_one(plan: ChunkPlan) -> WrittenChunk:
        path = output_dir / chunk_filename(prefix, plan.index, extension)
        log.info(
            "writing chunk %d/%d: %s (duration: %.2f minutes, %d packets)",
            plan.index,
            total,
            path.name,
            plan.duration / 60.0,
            plan.packet_count,
        )
        size = write_chunk(plan, packets, path)
        if tagger is not None:
            tagger.apply(path, plan.index, total)
        return WrittenChunk(plan=plan, path=path, size_bytes=size)

    progress = tqdm(total=total, unit="chunk", disable=not show_progress)
    written: List[WrittenChunk] = []

    try:
        if workers <= 1:
            for plan in plans:
                written.append(_write_one(plan))
                progress.update(1)
            return written

        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            futures = [executor.submit(_write_one, plan) for plan in plans]
            for future in futures:
                written.append(future.result())
                progress.update(1)
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return written
    finally:
        progress.close()
