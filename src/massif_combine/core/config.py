"""Runtime configuration with environment overrides."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_OUTPUT_NAME = "massif.out.combine"
ENCODING_ENV = "MASSIF_COMBINE_ENCODING"
OUTPUT_ENV = "MASSIF_COMBINE_OUTPUT"
BASE_DIR_ENV = "MASSIF_COMBINE_BASE_DIR"


@dataclass(frozen=True, slots=True)
class CombineConfig:
    # Same pair is used for reading and writing so undecodable bytes round-trip.
    encoding: str = "utf-8"
    decode_errors: str = "surrogateescape"
    output_name: str = DEFAULT_OUTPUT_NAME


def _check_encoding(name: str) -> str:
    try:
        codecs.lookup(name)
    except LookupError as exc:
        raise ValueError(f"{ENCODING_ENV} names an unknown encoding: {name!r}") from exc
    return name


def resolve_combine_config(cfg: CombineConfig | None = None) -> CombineConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = CombineConfig()

    changes: dict[str, str] = {}

    encoding = os.getenv(ENCODING_ENV)
    if encoding:
        changes["encoding"] = _check_encoding(encoding.strip())

    output = os.getenv(OUTPUT_ENV)
    if output and output.strip():
        changes["output_name"] = output.strip()

    if not changes:
        return cfg
    return replace(cfg, **changes)


def base_dir() -> Path:
    """Return the resolved base directory for MCP file access."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str | Path) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p
