"""
Build history: append-only NDJSON log of completed builds.

One line per build (written, no-op or failed). The file is trimmed to the
configured number of most recent entries on write. History is
best-effort: failures are logged, never raised into the build.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from architect.core.models.build import BuildResult

logger = logging.getLogger(__name__)


class HistoryEntry(BaseModel):
    """A single build history entry."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    draft_path: str = ""
    status: str = ""               # ok, no_changes, failed

    written: list[str] = Field(default_factory=list)
    skipped: int = 0
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    only: list[str] | None = None
    force: bool = False

    @classmethod
    def from_result(
        cls,
        result: BuildResult,
        draft_path: str,
        only: list[str] | None = None,
        force: bool = False,
    ) -> HistoryEntry:
        if not result.success:
            status = "failed"
        elif result.no_changes:
            status = "no_changes"
        else:
            status = "ok"
        return cls(
            draft_path=draft_path,
            status=status,
            written=list(result.generated),
            skipped=len(result.skipped),
            warnings=list(result.warnings),
            errors=list(result.errors),
            only=only,
            force=force,
        )


class BuildHistory:
    """Append-only build history writer."""

    def __init__(self, path: Path, max_entries: int = 100):
        self._path = path
        self._max_entries = max_entries

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: HistoryEntry) -> None:
        """Append an entry, trimming the oldest beyond ``max_entries``."""
        line = json.dumps(entry.model_dump(mode="json"), ensure_ascii=False)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            lines = self._read_lines()
            lines.append(line)
            if len(lines) > self._max_entries:
                lines = lines[-self._max_entries:]
                self._path.write_text("\n".join(lines) + "\n", encoding="utf-8")
            else:
                with self._path.open("a", encoding="utf-8") as f:
                    f.write(line + "\n")
            logger.debug("History entry written: %s %s", entry.status, entry.draft_path)
        except OSError as e:
            logger.error("Failed to write build history: %s", e)

    def read_all(self) -> list[HistoryEntry]:
        """Read all entries, oldest first. Corrupt lines are skipped."""
        entries = []
        for line_num, line in enumerate(self._read_lines(), start=1):
            try:
                entries.append(HistoryEntry.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning("Skipping corrupt history entry at line %d: %s", line_num, e)
        return entries

    def read_recent(self, n: int = 20) -> list[HistoryEntry]:
        return self.read_all()[-n:]

    def _read_lines(self) -> list[str]:
        if not self._path.is_file():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                return [line.strip() for line in f if line.strip()]
        except OSError as e:
            logger.error("Failed to read build history: %s", e)
            return []
