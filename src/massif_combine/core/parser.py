"""Line-oriented parser for massif snapshot dumps.

A dump is a preamble of ``desc:``/``cmd:``/``time_unit:`` header lines followed by
snapshot blocks::

    #-----------
    snapshot=0
    #-----------
    time=0
    mem_heap_B=0
    ...

The same dashed rule both closes the previous block and opens the next one, so the
parser tracks which kind of line it saw last to tell the two apart.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from .errors import DuplicateSnapshotOpen, OrphanContent
from .models import MassifDocument, Snapshot

HEADER_RE = re.compile(r"^(desc|cmd|time_unit):")
SNAPSHOT_MARK = "#-----------"
SNAPSHOT_NAME_RE = re.compile(r"snapshot=\d+", re.ASCII)
SNAPSHOT_TIME_RE = re.compile(r"time=(\d+)", re.ASCII)


class ParserState(str, Enum):
    """Kind of the last significant line seen."""

    NONE = "none"
    HEADER = "header"
    MARK = "mark"
    NAME = "name"
    CONTENT = "content"


class SnapshotParser:
    """Incremental parser that appends into a shared document.

    Feed lines one at a time with :meth:`feed` (terminators already stripped) and
    call :meth:`close` at end of input to commit the last pending snapshot.
    """

    def __init__(self, document: MassifDocument, *, capture_headers: bool = True) -> None:
        self.document = document
        self.capture_headers = capture_headers
        self.state = ParserState.NONE
        self.pending: Snapshot | None = None
        self.line_no = 0
        self.committed = 0

    def _commit_pending(self) -> None:
        if self.pending is not None and self.document.add_snapshot(self.pending):
            self.committed += 1
        self.pending = None

    def feed(self, line: str) -> None:
        self.line_no += 1

        # Header keywords switch state from anywhere, even inside a snapshot body.
        if HEADER_RE.search(line):
            self.state = ParserState.HEADER
            if self.capture_headers:
                self.document.add_header(line)
            return

        state = self.state
        if state in (ParserState.HEADER, ParserState.CONTENT) and line == SNAPSHOT_MARK:
            self.state = ParserState.MARK
            self._commit_pending()
            return

        if state is ParserState.MARK and SNAPSHOT_NAME_RE.search(line):
            self.state = ParserState.NAME
            return

        if state is ParserState.NAME and line == SNAPSHOT_MARK:
            self.state = ParserState.CONTENT
            if self.pending is not None:
                raise DuplicateSnapshotOpen(line_no=self.line_no)
            self.pending = Snapshot()
            return

        if state is ParserState.CONTENT:
            if self.pending is None:
                raise OrphanContent(line_no=self.line_no)
            self.pending.contents.append(line)
            m = SNAPSHOT_TIME_RE.search(line)
            if m:
                self.pending.time = int(m.group(1))

        # Anything else (preamble noise, stray lines after a mark) is ignored.

    def close(self) -> int:
        """Commit the trailing snapshot; return how many snapshots were committed."""
        self._commit_pending()
        return self.committed


def strip_line_ending(line: str) -> str:
    """Drop the trailing newline (LF or CRLF) of a raw line."""
    return line.rstrip("\r\n")


def parse_lines(
    lines: Iterable[str],
    document: MassifDocument | None = None,
    *,
    capture_headers: bool = True,
) -> MassifDocument:
    """Parse raw lines into ``document`` (a new one when omitted) and return it.

    Raises :class:`~massif_combine.core.errors.MalformedSequence` on structural errors;
    snapshots committed before the error stay in the document.
    """
    if document is None:
        document = MassifDocument()
    parser = SnapshotParser(document, capture_headers=capture_headers)
    for line in lines:
        parser.feed(strip_line_ending(line))
    parser.close()
    return document
