"""Core data models for massif dump merging."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import MassifCombineError


@dataclass(slots=True)
class Snapshot:
    """One profiler sample: sort key plus the opaque body lines."""

    time: int = 0
    contents: list[str] = field(default_factory=list)


@dataclass(slots=True)
class MassifDocument:
    """Headers (first source only) plus every snapshot collected so far."""

    headers: list[str] = field(default_factory=list)
    snapshots: list[Snapshot] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.snapshots

    def add_header(self, line: str) -> None:
        self.headers.append(line)

    def add_snapshot(self, snapshot: Snapshot) -> bool:
        """Append a snapshot; bodies without lines are dropped."""
        if not snapshot.contents:
            return False
        self.snapshots.append(snapshot)
        return True


@dataclass(frozen=True, slots=True)
class SourceError:
    """A failure recorded against one input while combining."""

    source: Path
    error: MassifCombineError


@dataclass(slots=True)
class CombineResult:
    """Outcome of a best-effort combine run over several sources."""

    document: MassifDocument
    sources: list[Path] = field(default_factory=list)
    errors: list[SourceError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def last_error(self) -> MassifCombineError | None:
        # Only the most recent failure is surfaced, like the original tool's return code.
        return self.errors[-1].error if self.errors else None
