"""Write a merged document back out in massif format."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import aiofiles

from .config import CombineConfig
from .errors import EmptyDocument, SinkFinalizeError, SinkUnavailable, SinkWriteError
from .models import MassifDocument, Snapshot
from .parser import SNAPSHOT_MARK

logger = logging.getLogger(__name__)


def sort_snapshots(document: MassifDocument) -> None:
    """Order snapshots by time in place. Tie order is not part of the contract."""
    document.snapshots.sort(key=lambda s: s.time)


def snapshot_block(index: int, snapshot: Snapshot) -> Iterator[str]:
    """Yield the lines of one snapshot block, renumbered to ``index``."""
    yield SNAPSHOT_MARK
    yield f"snapshot={index}"
    yield SNAPSHOT_MARK
    yield from snapshot.contents


def render_lines(document: MassifDocument) -> Iterator[str]:
    """Sort the document and yield its output lines without terminators."""
    if document.is_empty:
        raise EmptyDocument()

    sort_snapshots(document)
    yield from document.headers
    for i, snapshot in enumerate(document.snapshots):
        yield from snapshot_block(i, snapshot)


async def write_document(
    document: MassifDocument,
    path: str | Path,
    *,
    config: CombineConfig | None = None,
) -> Path:
    """Write ``document`` to ``path`` and return the path.

    Raises EmptyDocument before touching the destination; open, write and
    flush/close failures raise SinkUnavailable, SinkWriteError and
    SinkFinalizeError respectively.
    """
    cfg = config or CombineConfig()
    path = Path(path)

    if document.is_empty:
        logger.warning("No content, nothing written to %s", path)
        raise EmptyDocument()

    lines = render_lines(document)

    try:
        f = await aiofiles.open(path, "w", encoding=cfg.encoding, errors=cfg.decode_errors)
    except OSError as exc:
        raise SinkUnavailable(path, exc.strerror or str(exc)) from exc

    try:
        for line in lines:
            await f.write(line + "\n")
    except (OSError, UnicodeEncodeError) as exc:
        await _close_quietly(f, path)
        raise SinkWriteError(path, str(exc)) from exc

    try:
        try:
            await f.flush()
        finally:
            await f.close()
    except OSError as exc:
        raise SinkFinalizeError(path, exc.strerror or str(exc)) from exc

    logger.info(
        "Wrote %s (%d header line(s), %d snapshot(s))",
        path,
        len(document.headers),
        len(document.snapshots),
    )
    return path


async def _close_quietly(f, path: Path) -> None:
    try:
        await f.close()
    except OSError as exc:
        logger.debug("Closing %s after a write error also failed: %s", path, exc)
