"""
State ledger persistence: atomic read/write of .architect-state.json.

The ledger is always read in full and written in full. Writes go to a
temp file in the same directory and are then renamed over the target,
so a concurrent reader never observes a half-written document.
Concurrent writers are not supported (single-writer assumption).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from architect.core.models.ledger import DraftRecord, GeneratedFileRecord, LedgerState

logger = logging.getLogger(__name__)


def load_state(path: Path) -> LedgerState:
    """Load the ledger from a JSON file.

    Args:
        path: Path to the ledger JSON file.

    Returns:
        LedgerState. If the file doesn't exist or is unreadable, a fresh one.
    """
    if not path.is_file():
        logger.info("No state ledger at %s, starting fresh", path)
        return LedgerState()

    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
        state = LedgerState.model_validate(data)
        logger.debug("Loaded ledger from %s (last_run=%s)", path, state.last_run)
        return state
    except json.JSONDecodeError as e:
        logger.warning("Corrupt state ledger %s: %s, starting fresh", path, e)
        return LedgerState()
    except Exception as e:
        logger.warning("Cannot load state ledger from %s: %s, starting fresh", path, e)
        return LedgerState()


def save_state(state: LedgerState, path: Path) -> None:
    """Save the ledger to a JSON file (atomic write).

    Args:
        state: The ledger to save.
        path: Target path for the ledger file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    data = state.model_dump(mode="json", by_alias=True)
    if not data.get("lastBuildBackup"):
        data.pop("lastBuildBackup", None)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".architect-state_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.replace(path)
        logger.debug("Ledger saved to %s", path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save ledger to %s: %s", path, e)
        raise


class StateLedger:
    """Manager for one ledger file.

    Every accessor re-reads the file; the build orchestrator reads once per
    run through ``load()`` and writes once through ``update()``.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LedgerState:
        return load_state(self._path)

    def save(self, state: LedgerState) -> None:
        state.touch()
        save_state(state, self._path)

    def update(
        self,
        draft_path: str,
        draft_hash: str | None,
        generated: dict[str, GeneratedFileRecord],
        state: LedgerState | None = None,
        backup: dict[str, str | None] | None = None,
    ) -> LedgerState:
        """Merge one run's results into the ledger and persist it.

        Args:
            draft_path: Draft file the run was built from.
            draft_hash: New draft hash, or None to leave the recorded one.
            generated: Records for files written this run.
            state: Ledger snapshot to merge into (re-read when None).
            backup: Pre-run contents to keep for revert, if any.

        Returns:
            The ledger as persisted.
        """
        merged = (state or self.load()).model_copy(deep=True)
        if draft_hash is not None:
            merged.drafts[draft_path] = DraftRecord(hash=draft_hash)
        merged.generated.update(generated)
        if backup is not None:
            merged.last_build_backup = dict(backup)
        self.save(merged)
        return merged

    def get_draft_hash(self, draft_path: str) -> str | None:
        return self.load().draft_hash(draft_path)

    def get_record(self, path: str) -> GeneratedFileRecord | None:
        return self.load().generated.get(path)

    def get_generated_path_for_table(self, table: str) -> str | None:
        """Path of the generated file labelled with *table*, if any."""
        return self.load().path_for_table(table)

    # ── Last build backup (revert) ──────────────────────────────

    def save_last_build_backup(self, backup: dict[str, str | None]) -> None:
        state = self.load()
        state.last_build_backup = dict(backup)
        self.save(state)

    def get_last_build_backup(self) -> dict[str, str | None]:
        return dict(self.load().last_build_backup)

    def clear_last_build_backup(self) -> None:
        state = self.load()
        if not state.last_build_backup:
            return
        state.last_build_backup = {}
        self.save(state)
