"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from massif_combine.core.config import BASE_DIR_ENV, base_dir, resolve_combine_config, safe_resolve
from massif_combine.tools.models import CombineReport

SAMPLE_DUMP = (
    "desc: --time-unit=ms\n"
    "cmd: ./server --port 8080\n"
    "time_unit: ms\n"
    "#-----------\n"
    "snapshot=0\n"
    "#-----------\n"
    "time=0\n"
    "mem_heap_B=0\n"
    "mem_heap_extra_B=0\n"
    "mem_stacks_B=0\n"
    "heap_tree=empty\n"
    "#-----------\n"
    "snapshot=1\n"
    "#-----------\n"
    "time=1520\n"
    "mem_heap_B=40960\n"
    "mem_heap_extra_B=1024\n"
    "mem_stacks_B=0\n"
    "heap_tree=empty\n"
)


def _resolve_resource_path(path: str) -> Path:
    """Resolve and validate a dump path under the base directory."""
    resolved = safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    return resolved


def _read_text(path: Path) -> str:
    cfg = resolve_combine_config()
    # Undecodable bytes are shown as replacement characters; combining keeps them intact.
    return path.read_text(encoding=cfg.encoding, errors="replace")


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://massif-combine/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://massif-combine/help\n"
            "- app://massif-combine/examples/sample-dump\n"
            "- app://massif-combine/schemas/combine-report\n"
            f"- massif://{{path}} (restricted to {BASE_DIR_ENV})\n"
            f"\nBase directory: {base_dir()}\n"
        )

    @mcp.resource("app://massif-combine/examples/sample-dump")
    def sample_dump() -> str:
        """Return a tiny massif dump for demos and tests."""
        return SAMPLE_DUMP

    @mcp.resource("app://massif-combine/schemas/combine-report")
    def combine_report_schema() -> dict[str, Any]:
        """Return the JSON schema of the combine tool's report."""
        return CombineReport.model_json_schema()

    @mcp.resource("massif://{path}")
    async def read_dump(path: str) -> str:
        """Read a massif dump from within MASSIF_COMBINE_BASE_DIR."""
        p = _resolve_resource_path(path)
        return await asyncio.to_thread(_read_text, p)
