from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from massif_combine.core.combiner import combine_files
from massif_combine.core.config import DEFAULT_OUTPUT_NAME, CombineConfig, resolve_combine_config
from massif_combine.core.errors import MassifCombineError
from massif_combine.core.models import MassifDocument
from massif_combine.core.serializer import write_document
from massif_combine.core.sources import delete_files, resolve_sources

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level_name = os.getenv("MASSIF_COMBINE_LOG_LEVEL", "INFO").upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser(default_output: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="massif-combine",
        description="Combine massif heap profiler dumps into one chronologically ordered file.",
    )
    p.add_argument("-o", dest="output", default=default_output, help="Output file path")
    p.add_argument("-d", dest="delete", action="store_true", help="After combining, delete input files")
    p.add_argument("-v", dest="verbose", action="store_true", help="Verbose processing")
    p.add_argument("patterns", nargs="*", metavar="file-pattern", help="Input files; may include '*'")
    return p


async def run(
    patterns: Sequence[str],
    output: str | Path,
    *,
    delete: bool = False,
    verbose: bool = False,
    config: CombineConfig | None = None,
) -> bool:
    """Combine the matched inputs into ``output``; return True when the write succeeded."""
    cfg = config or resolve_combine_config()
    inputs = resolve_sources(patterns)

    def progress(path: Path, document: MassifDocument) -> None:
        if verbose:
            print(f"Input: {path}  Size: {len(document.snapshots)}")

    result = await combine_files(inputs, config=cfg, on_source=progress)
    if not result.ok:
        LOGGER.warning("%d of %d input(s) failed; last error: %s", len(result.errors), len(inputs), result.last_error)

    try:
        await write_document(result.document, output, config=cfg)
    except MassifCombineError as e:
        LOGGER.error("%s", e)
        return False

    if delete:
        delete_files(inputs, verbose=verbose)
    return True


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        cfg = resolve_combine_config()
    except ValueError as e:
        build_parser(DEFAULT_OUTPUT_NAME).error(str(e))

    p = build_parser(cfg.output_name)
    if not argv:
        p.print_usage()
        return 1

    # Unknown options are dropped, like getopt in the original tool.
    args, extras = p.parse_known_args(argv)
    _configure_logging(args.verbose)
    unknown = [a for a in extras if a.startswith("-")]
    if unknown:
        LOGGER.warning("Ignoring unknown option(s): %s", " ".join(unknown))
    # Positionals that follow an unknown option can land in extras.
    patterns = args.patterns + [a for a in extras if not a.startswith("-")]

    asyncio.run(
        run(patterns, args.output, delete=args.delete, verbose=args.verbose, config=cfg)
    )
    # Reaching the write attempt counts as a completed run, whatever its outcome.
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
