"""
State ledger models: the persisted record of drafts and generated files.

Serialized to .architect-state.json. The ledger is the single source of
truth for "has this draft changed" and "is this file safe to overwrite".
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

LEDGER_VERSION = "1.0.0"


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class FileOwnership(str, Enum):
    """How a generated file may be treated on later builds."""

    REGENERATE = "regenerate"          # safe to overwrite on every build
    SCAFFOLD_ONLY = "scaffold_only"    # written once, protected afterwards


class GeneratedFileRecord(BaseModel):
    """One previously written output file."""

    path: str
    hash: str
    ownership: FileOwnership = FileOwnership.REGENERATE
    table: str | None = None
    generator: str = ""


class DraftRecord(BaseModel):
    """Last seen content hash of one draft file."""

    hash: str
    last_built: str = Field(default_factory=_now_iso, alias="lastBuilt")

    model_config = ConfigDict(populate_by_name=True)


class LedgerState(BaseModel):
    """Root ledger document.

    A missing ledger loads as this model's defaults, with ``version``
    left at "unknown" until the first save.
    """

    model_config = ConfigDict(populate_by_name=True)

    version: str = "unknown"
    last_run: str | None = Field(default=None, alias="lastRun")
    drafts: dict[str, DraftRecord] = Field(default_factory=dict)
    generated: dict[str, GeneratedFileRecord] = Field(default_factory=dict)

    # Contents overwritten by the last successful build (None = file was absent).
    last_build_backup: dict[str, str | None] = Field(
        default_factory=dict, alias="lastBuildBackup"
    )

    def touch(self) -> None:
        """Stamp the ledger as written by the current tool version."""
        self.version = LEDGER_VERSION
        self.last_run = _now_iso()

    def draft_hash(self, draft_path: str) -> str | None:
        record = self.drafts.get(draft_path)
        return record.hash if record else None

    def path_for_table(self, table: str) -> str | None:
        for path, record in self.generated.items():
            if record.table == table:
                return path
        return None
