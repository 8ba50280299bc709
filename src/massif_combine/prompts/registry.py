"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP


def _format_inputs(inputs: Sequence[str] | str) -> str:
    """Return inputs as a JSON array literal for prompt display."""
    if isinstance(inputs, str):
        items = [s.strip() for s in inputs.split(",") if s.strip()]
    else:
        items = [str(s).strip() for s in inputs if str(s).strip()]
    if not items:
        return "[]"
    quoted = ", ".join(f'"{item}"' for item in items)
    return f"[{quoted}]"


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def merge_profiles(
        inputs: Sequence[str] | str = ("massif.out.*",),
        output_path: str = "massif.out.combine",
        delete_inputs: bool = False,
    ) -> list[dict[str, Any]]:
        """Build a prompt that merges massif dumps and summarizes the result."""
        inputs_display = _format_inputs(inputs)
        return [
            {
                "role": "system",
                "content": (
                    "You are a careful assistant working with valgrind massif heap profiles. "
                    "Report only what the tools return; do not invent snapshot data."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Merge the massif dumps using combine_massif_files. Follow this workflow:\n"
                    "- Call preview_combined first with the same inputs and check the "
                    "snapshot times look plausible.\n"
                    "- Then call combine_massif_files with the parameters below.\n"
                    "- Inputs must be a list of strings; shell patterns such as "
                    "massif.out.* are allowed.\n"
                    "- If the report lists errors, name each failing input and its reason. "
                    "Inputs that failed were skipped, the rest were still merged.\n"
                    "- If nothing was written, say so and suggest checking the input patterns.\n\n"
                    "Call combine_massif_files with:\n"
                    f"- inputs: {inputs_display}\n"
                    f"- output_path: {output_path}\n"
                    f"- delete_inputs: {str(delete_inputs).lower()}\n\n"
                    "Return:\n"
                    "1) Output file and snapshot count\n"
                    "2) Inputs merged, in order\n"
                    "3) Failures (or 'none')\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "You can inspect the merged file afterwards via:"},
                    {"type": "resource", "uri": f"massif://{output_path}"},
                ],
            },
        ]
