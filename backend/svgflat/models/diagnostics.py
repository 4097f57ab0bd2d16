"""Diagnostics and report models returned by a flatten run."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Diagnostic(BaseModel):
    level: Literal["warning", "error"] = "warning"
    code: str
    tag: str = ""
    element_id: str | None = None
    message: str = ""


class FlattenReport(BaseModel):
    flattened: int = 0
    converted: int = 0
    resolved: int = 0
    propagated: int = 0
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    # Element label → error message, only populated when fail_fast is off
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    def codes(self) -> list[str]:
        return [d.code for d in self.diagnostics]
