"""Error taxonomy for parsing, combining and writing massif dumps."""

from __future__ import annotations

from pathlib import Path


class MassifCombineError(Exception):
    """Base class for every domain error raised by massif_combine."""


class SourceUnavailable(MassifCombineError):
    """An input dump could not be opened or read."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        msg = f"Cannot read massif dump: {self.path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class MalformedSequence(MassifCombineError):
    """The input does not follow the snapshot grammar."""

    def __init__(self, message: str, *, line_no: int | None = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class DuplicateSnapshotOpen(MalformedSequence):
    """A snapshot header was opened while another one is still pending."""

    def __init__(self, *, line_no: int | None = None) -> None:
        super().__init__("found new snapshot but another snapshot is still open", line_no=line_no)


class OrphanContent(MalformedSequence):
    """Body content appeared with no open snapshot to hold it."""

    def __init__(self, *, line_no: int | None = None) -> None:
        super().__init__("snapshot content found outside of an open snapshot", line_no=line_no)


class EmptyDocument(MassifCombineError):
    """Nothing to write: no headers and no snapshots."""

    def __init__(self) -> None:
        super().__init__("No content to write")


class SinkError(MassifCombineError):
    """Base class for output failures."""

    stage = "output"

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        msg = f"Error during {self.stage} of {self.path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class SinkUnavailable(SinkError):
    """The destination could not be opened; nothing was written."""

    stage = "open"


class SinkWriteError(SinkError):
    """Writing failed part way; the destination may hold partial output."""

    stage = "write"


class SinkFinalizeError(SinkError):
    """Flushing or closing the destination failed."""

    stage = "finalize"
