"""Massif dump parsing, merging and serialization."""

from __future__ import annotations

from .combiner import add_source, combine_files
from .config import CombineConfig, resolve_combine_config
from .errors import (
    DuplicateSnapshotOpen,
    EmptyDocument,
    MalformedSequence,
    MassifCombineError,
    OrphanContent,
    SinkError,
    SinkFinalizeError,
    SinkUnavailable,
    SinkWriteError,
    SourceUnavailable,
)
from .models import CombineResult, MassifDocument, Snapshot, SourceError
from .parser import ParserState, SnapshotParser, parse_lines
from .serializer import render_lines, sort_snapshots, write_document
from .sources import delete_files, resolve_sources

__all__ = [
    "CombineConfig",
    "CombineResult",
    "DuplicateSnapshotOpen",
    "EmptyDocument",
    "MalformedSequence",
    "MassifCombineError",
    "MassifDocument",
    "OrphanContent",
    "ParserState",
    "SinkError",
    "SinkFinalizeError",
    "SinkUnavailable",
    "SinkWriteError",
    "Snapshot",
    "SnapshotParser",
    "SourceError",
    "SourceUnavailable",
    "add_source",
    "combine_files",
    "delete_files",
    "parse_lines",
    "render_lines",
    "resolve_combine_config",
    "resolve_sources",
    "sort_snapshots",
    "write_document",
]
