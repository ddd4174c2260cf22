import copy
from pathlib import Path
from threading import Lock
from typing import List, Optional

from mutagen import MutagenError
from mutagen.id3 import ID3, ID3NoHeaderError, TIT2, TRCK

from pipeline.errors import TagWriteWarning
from pipeline.logging_utils import get_logger

log = get_logger(__name__)

UTF8 = 3


def read_source_tag(path: str | Path) -> Optional[ID3]:
    """Read the ID3 tag of ``path``. A missing or unreadable tag yields None."""
    try:
        return ID3(str(path))
    except ID3NoHeaderError:
        log.info("no ID3 tag in %s", path)
        return None
    except (MutagenError, OSError) as exc:
        log.warning("could not read ID3 tag of %s: %s", path, exc)
        return None


def source_title(tag: ID3) -> Optional[str]:
    frame = tag.get("TIT2")
    if frame is None or not frame.text:
        return None
    return str(frame.text[0])


def derive_chunk_tag(source: ID3, index: int, total: int) -> ID3:
    """
    Build the tag for chunk ``index`` of ``total`` (1-based).

    Returns a new ID3 holding copies of every source frame; ``source`` is
    left untouched. The title gets a "(Part i/n)" suffix when the source
    has one, and the track number is set to ``index``.
    """
    tag = ID3()
    for frame in source.values():
        tag.add(copy.deepcopy(frame))

    title = source_title(source)
    if title is not None:
        tag.setall("TIT2", [TIT2(encoding=UTF8, text=[f"{title} (Part {index}/{total})"])])

    tag.setall("TRCK", [TRCK(encoding=UTF8, text=[str(index)])])
    return tag


class ChunkTagger:
    """Writes a derived tag onto each chunk file; failures are warnings."""

    def __init__(self, source: ID3, version: int = 4):
        if version not in (3, 4):
            raise ValueError("ID3 version must be 3 or 4")
        self.source = source
        self.version = version

        self._warnings: List[TagWriteWarning] = []
        self._lock = Lock()

    @property
    def warnings(self) -> List[TagWriteWarning]:
        with self._lock:
            return list(self._warnings)

    def apply(self, path: str | Path, index: int, total: int) -> Optional[TagWriteWarning]:
        tag = derive_chunk_tag(self.source, index, total)
        if self.version == 3:
            # save() only rewrites the header; v2.4-only frames need converting.
            tag.update_to_v23()
        try:
            tag.save(str(path), v2_version=self.version)
        except (MutagenError, OSError) as exc:
            warning = TagWriteWarning(path, exc)
            log.warning("failed to write ID3 tags for chunk %d (%s): %s", index, path, exc)
            with self._lock:
                self._warnings.append(warning)
            return warning
        return None
