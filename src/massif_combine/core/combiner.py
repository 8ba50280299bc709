"""Read several massif dumps and merge them into one document.

Sources are processed strictly in order; each one is parsed to completion before the
next is opened. A failing source is logged and recorded, and the run moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

import aiofiles

from .config import CombineConfig, resolve_combine_config
from .errors import MalformedSequence, SourceUnavailable
from .models import CombineResult, MassifDocument, SourceError
from .parser import SnapshotParser, strip_line_ending

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, MassifDocument], None]


async def add_source(
    path: str | Path,
    document: MassifDocument,
    *,
    config: CombineConfig | None = None,
) -> int:
    """Parse one dump into ``document``; return the number of snapshots it contributed.

    Headers are captured only while the document has none, so the first source that
    carries headers wins.
    """
    cfg = config or CombineConfig()
    path = Path(path)
    parser = SnapshotParser(document, capture_headers=not document.headers)

    try:
        # Only "\n" ends a line; a lone "\r" stays inside the body line.
        f = await aiofiles.open(path, encoding=cfg.encoding, errors=cfg.decode_errors, newline="\n")
    except OSError as exc:
        raise SourceUnavailable(path, exc.strerror or str(exc)) from exc

    try:
        async for line in f:
            parser.feed(strip_line_ending(line))
    except OSError as exc:
        raise SourceUnavailable(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SourceUnavailable(path, f"cannot decode as {cfg.encoding}") from exc
    finally:
        await f.close()

    return parser.close()


async def combine_files(
    paths: Iterable[str | Path],
    *,
    document: MassifDocument | None = None,
    config: CombineConfig | None = None,
    on_source: ProgressCallback | None = None,
) -> CombineResult:
    """Merge every source into one document, continuing past per-source failures."""
    cfg = resolve_combine_config(config)
    result = CombineResult(document=document if document is not None else MassifDocument())

    for raw in paths:
        path = Path(raw)
        result.sources.append(path)
        try:
            added = await add_source(path, result.document, config=cfg)
        except (SourceUnavailable, MalformedSequence) as exc:
            logger.warning("Skipping %s: %s", path, exc)
            result.errors.append(SourceError(source=path, error=exc))
        else:
            logger.debug("Parsed %s: %d snapshot(s)", path, added)

        if on_source is not None:
            on_source(path, result.document)

    return result
