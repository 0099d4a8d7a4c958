"""Pydantic models returned by the reconciler and the tool surface."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class MCPResponse(BaseModel):
    success: bool
    message: str | None = None
    error: str | None = None
    data: Any | None = None


class SchemaMismatch(BaseModel):
    """A capability on a target node was missing a field the rig needs."""
    node: str                     # hierarchy path, e.g. "Bear/Arm.L"
    capability: str               # capability kind
    field: str
    message: str = ""


class Report(BaseModel):
    """Outcome of one fix or build run."""
    operation: Literal["fix", "build"]
    target: str                   # template path (fix) or root node name (build)
    proxy_parent: str | None = None
    processed: int = 0
    persisted: bool = False
    edit_count: int = 0
    lines: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[SchemaMismatch] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        noun = "node" if self.processed == 1 else "nodes"
        text = f"{self.operation}: processed {self.processed} {noun} in '{self.target}'"
        if self.errors:
            text += f" with {len(self.errors)} error(s)"
        elif self.warnings and self.processed == 0:
            text += f" ({self.warnings[0]})"
        return text
