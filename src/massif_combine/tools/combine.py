"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import islice
from pathlib import Path
from typing import Any

from massif_combine.core.combiner import combine_files
from massif_combine.core.config import resolve_combine_config, safe_resolve
from massif_combine.core.errors import EmptyDocument, MassifCombineError
from massif_combine.core.serializer import snapshot_block, sort_snapshots, write_document
from massif_combine.core.sources import delete_files, resolve_sources

from .models import CombineReport, SourceFailure

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_LIMIT = 20
HARD_PREVIEW_LIMIT = 500


def _resolve_inputs(inputs: Sequence[str] | str) -> list[Path]:
    """Resolve user-supplied names/patterns relative to the base directory."""
    if isinstance(inputs, str):
        inputs = [inputs]
    tokens = [s.strip() for s in inputs if s and s.strip()]
    if not tokens:
        raise ValueError("inputs must name at least one file or pattern")

    anchored: list[str] = []
    for token in tokens:
        # Patterns are resolved as paths so they cannot escape the base dir.
        anchored.append(str(safe_resolve(token)))
    return [safe_resolve(p) for p in resolve_sources(anchored)]


async def combine_massif_files_impl(
    *,
    inputs: Sequence[str] | str,
    output_path: str | None = None,
    delete_inputs: bool = False,
) -> dict[str, Any]:
    """Implementation for the `combine_massif_files` MCP tool."""
    cfg = resolve_combine_config()
    paths = _resolve_inputs(inputs)
    out = safe_resolve(output_path or cfg.output_name)
    if out in paths:
        raise ValueError("output_path must not be one of the inputs")

    result = await combine_files(paths, config=cfg)

    written = True
    try:
        await write_document(result.document, out, config=cfg)
    except MassifCombineError as e:
        logger.warning("Combine to %s failed: %s", out, e)
        written = False
        failures = [SourceFailure(source=str(out), error=type(e).__name__, message=str(e))]
    else:
        failures = []

    deleted = False
    if written and delete_inputs:
        deleted = delete_files(paths)

    report = CombineReport(
        ok=written and result.ok,
        written=written,
        output_path=str(out),
        inputs=[str(p) for p in paths],
        header_count=len(result.document.headers),
        snapshot_count=len(result.document.snapshots),
        deleted_inputs=deleted,
        errors=[
            SourceFailure(source=str(err.source), error=type(err.error).__name__, message=str(err.error))
            for err in result.errors
        ]
        + failures,
    )
    return report.model_dump()


async def preview_combined_impl(
    *,
    inputs: Sequence[str] | str,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `preview_combined` MCP tool.

    Returns the header lines and the first ``limit`` snapshot blocks exactly as they
    would be written, without creating any file.
    """
    if limit is None:
        limit = DEFAULT_PREVIEW_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, HARD_PREVIEW_LIMIT)

    cfg = resolve_combine_config()
    result = await combine_files(_resolve_inputs(inputs), config=cfg)
    doc = result.document

    if doc.is_empty:
        raise EmptyDocument()

    sort_snapshots(doc)
    blocks = [
        {"index": i, "time": s.time, "lines": list(snapshot_block(i, s))}
        for i, s in islice(enumerate(doc.snapshots), limit)
    ]
    return {
        "headers": list(doc.headers),
        "snapshot_count": len(doc.snapshots),
        "times": [s.time for s in doc.snapshots],
        "snapshots": blocks,
        "errors": [f"{err.source}: {err.error}" for err in result.errors],
    }
