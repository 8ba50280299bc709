"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (combine or preview massif dumps)
- Resources: addressable data blobs (e.g., a dump via URI)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m massif_combine.server.combine_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from massif_combine.prompts.registry import register_prompts
from massif_combine.resources.registry import register_resources
from massif_combine.tools.combine import combine_massif_files_impl, preview_combined_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; stdout carries the protocol.
    """
    level_name = os.getenv("MASSIF_COMBINE_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


mcp = FastMCP("massif-combine", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def combine_massif_files(
    inputs: Sequence[str],
    output_path: str | None = None,
    delete_inputs: bool = False,
) -> dict[str, Any]:
    """Merge massif dumps into one file ordered by snapshot time.

    Parameters
    ----------
    inputs:
        File paths or shell patterns (e.g. ["massif.out.*"]), relative to the base directory.
        Inputs are merged in the given order; only the first input's header lines are kept.
    output_path:
        Destination file. Defaults to massif.out.combine in the base directory.
    delete_inputs:
        Remove the resolved inputs after a successful write.

    Returns
    -------
    dict:
        CombineReport: {"ok", "written", "output_path", "inputs", "header_count",
        "snapshot_count", "deleted_inputs", "errors"}
    """
    return await combine_massif_files_impl(
        inputs=inputs,
        output_path=output_path,
        delete_inputs=delete_inputs,
    )


@mcp.tool()
async def preview_combined(
    inputs: Sequence[str],
    limit: int | None = None,
) -> dict[str, Any]:
    """Show the merged headers and first snapshot blocks without writing a file.

    Parameters
    ----------
    inputs:
        File paths or shell patterns, as for combine_massif_files.
    limit:
        Maximum number of snapshot blocks returned (hard-capped in the implementation).
    """
    return await preview_combined_impl(inputs=inputs, limit=limit)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
