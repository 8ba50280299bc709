"""JSON report models returned by the MCP tools."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SourceFailure(BaseModel):
    source: str = Field(description="Input path that failed.")
    error: str = Field(description="Error class name, e.g. SourceUnavailable.")
    message: str = Field(description="Human readable reason.")


class CombineReport(BaseModel):
    ok: bool = Field(description="True when every input parsed and the output was written.")
    written: bool = Field(description="True when the output file was written.")
    output_path: str = Field(description="Destination path of the combined dump.")
    inputs: list[str] = Field(default_factory=list, description="Resolved input files, in merge order.")
    header_count: int = Field(ge=0, description="Header lines kept (first source only).")
    snapshot_count: int = Field(ge=0, description="Snapshots written, renumbered from 0.")
    deleted_inputs: bool = Field(default=False, description="Whether inputs were removed afterwards.")
    errors: list[SourceFailure] = Field(default_factory=list)
