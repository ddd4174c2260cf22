from dataclasses import dataclass, field
from pathlib import Path

from pipeline import config


def minutes_to_seconds(minutes: float) -> float:
    return float(minutes) * 60.0


def resolve_extension(input_path: Path, extension: str | None = None) -> str:
    if extension:
        return extension.lstrip(".")
    suffix = Path(input_path).suffix.lstrip(".")
    return suffix.lower() or config.DEFAULT_EXTENSION


@dataclass(frozen=True)
class SplitConfig:
    input_path: Path
    chunk_seconds: float = field(default_factory=lambda: minutes_to_seconds(config.DEFAULT_CHUNK_MINUTES))
    output_dir: Path = field(default_factory=lambda: Path(config.DEFAULT_OUTPUT_DIR))
    prefix: str = field(default_factory=lambda: config.DEFAULT_PREFIX)
    format_hint: str | None = None
    extension: str | None = None
    tag_version: int = field(default_factory=lambda: config.ID3_VERSION)
    workers: int = field(default_factory=lambda: config.WRITE_WORKERS)
    show_progress: bool = True

    def __post_init__(self):
        # Paths may be handed in as strings.
        object.__setattr__(self, "input_path", Path(self.input_path))
        object.__setattr__(self, "output_dir", Path(self.output_dir))

        if not self.chunk_seconds > 0:
            raise ValueError("chunk_seconds must be positive")
        if not self.prefix:
            raise ValueError("prefix is required")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.tag_version not in (3, 4):
            raise ValueError("tag_version must be 3 or 4")

    @property
    def output_extension(self) -> str:
        return resolve_extension(self.input_path, self.extension)
