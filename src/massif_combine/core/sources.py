"""Input enumeration and cleanup around a combine run."""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_sources(tokens: Iterable[str]) -> list[Path]:
    """Expand file names and shell patterns into existing files, keeping token order."""
    out: list[Path] = []
    for token in tokens:
        if os.path.isfile(token):
            out.append(Path(token))
            continue

        matches = [Path(m) for m in sorted(glob.glob(token)) if os.path.isfile(m)]
        if not matches:
            logger.warning("No input files match %r", token)
            continue
        out.extend(matches)
    return out


def delete_files(paths: Iterable[str | Path], *, verbose: bool = False) -> bool:
    """Remove every path; return False if any removal failed."""
    ok = True
    for p in paths:
        path = Path(p)
        if verbose:
            print(f"Deleting file {path}")
        try:
            path.unlink()
        except OSError as exc:
            logger.error("Error removing file %s: %s", path, exc)
            ok = False
    return ok
