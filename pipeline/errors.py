from __future__ import annotations


class SplitError(Exception):
    """Base error for a split run. Every subclass aborts the whole run."""


class SourceOpenError(SplitError):
    """Raised when the input file is missing or unreadable."""


class ProbeError(SplitError):
    """Raised when the container format is not recognized."""


class NoDefaultTrackError(SplitError):
    """Raised when the container has no audio track to split."""


class NoTimeBaseError(SplitError):
    """Raised when the audio track carries no time base."""


class EmptyStreamError(SplitError):
    """Raised when zero packets were read from the track."""


class DemuxError(SplitError):
    """Raised when the demuxer fails mid-stream (distinct from end of stream)."""


class SplitIOError(SplitError, OSError):
    """Raised when output directories or chunk files cannot be written."""


class OutputDirectoryError(SplitIOError):
    pass


class ChunkWriteError(SplitIOError):
    pass


class TagWriteWarning(UserWarning):
    """Non-fatal: a chunk's tag could not be written. Logged and skipped."""

    def __init__(self, path, cause: BaseException):
        super().__init__(f"Failed to write tags to {path}: {cause}")
        self.path = path
        self.cause = cause
