"""
Build models: generator candidates, reconciliation decisions and results.

``GeneratedFile`` is what a generator proposes; ``PlannedAction`` is what
reconciliation decides for it; ``BuildResult`` and ``PlanResult`` are what
a build or a dry-run plan report back to the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from architect.core.models.ledger import FileOwnership, GeneratedFileRecord
from architect.core.services.hashing import hash_text


class GeneratedFile(BaseModel):
    """A candidate output file produced by a generator.

    Attributes:
        path:      Absolute output path.
        content:   Full file content.
        ownership: Ownership policy after path-pattern overrides.
        table:     Optional entity label for reverse lookup.
        generator: Name of the generator variant that produced it.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    ownership: FileOwnership = FileOwnership.REGENERATE
    table: str | None = None
    generator: str = ""
    reason: str = ""

    @property
    def hash(self) -> str:
        return hash_text(self.content)

    def to_record(self) -> GeneratedFileRecord:
        return GeneratedFileRecord(
            path=self.path,
            hash=self.hash,
            ownership=self.ownership,
            table=self.table,
            generator=self.generator,
        )


class Decision(str, Enum):
    """Reconciliation outcome for one candidate."""

    WRITE = "write"
    SKIP = "skip"
    WARN = "warn"      # skipped, with an ownership warning


class PlannedAction(BaseModel):
    """The decision taken (or to be taken) for one candidate path."""

    path: str
    generator: str = ""
    decision: Decision
    reason: str = ""                   # new, changed, unchanged, scaffold_only, forced
    ownership: FileOwnership = FileOwnership.REGENERATE


class BuildResult(BaseModel):
    """Outcome of one orchestration run."""

    generated: dict[str, GeneratedFileRecord] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    success: bool = True
    no_changes: bool = False
    decisions: list[PlannedAction] = Field(default_factory=list)

    # Pre-run content of every file touched this run (None = did not exist).
    backup: dict[str, str | None] = Field(default_factory=dict, exclude=True)

    @classmethod
    def no_changes_result(cls) -> BuildResult:
        return cls(success=True, no_changes=True)

    @classmethod
    def failure(cls, errors: list[str]) -> BuildResult:
        return cls(errors=errors, success=False)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class PlanResult(BaseModel):
    """Read-only preview of what a build would do."""

    draft_path: str = ""
    actions: list[PlannedAction] = Field(default_factory=list)
    would_short_circuit: bool = False
    errors: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def decision_set(self) -> set[tuple[str, str]]:
        return {(a.path, a.decision.value) for a in self.actions}

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["success"] = self.success
        return data
