"""
Build orchestrator: the transactional build pipeline.

Flow:
    Idle → DraftLoading → ChangeCheck → Generating → Reconciling
         → Writing → Persisting → Done | Failed

Parse and generation errors abort before any file is touched. A write
error rolls back every file written in the run. A ledger persist error
is retried, then reported as a warning on an otherwise successful run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from architect.core.config.draft_loader import load_draft
from architect.core.errors import (
    DraftInvalid,
    DraftNotFound,
    GenerationError,
    LedgerPersistError,
    WriteError,
)
from architect.core.engine.reconcile import dedupe, ownership_warning, reconcile
from architect.core.models.build import BuildResult, Decision, GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import LedgerState
from architect.core.models.settings import Settings
from architect.core.persistence.history import BuildHistory, HistoryEntry
from architect.core.persistence.state_file import StateLedger
from architect.core.services.change_detector import ChangeDetector
from architect.core.services.generators.registry import GeneratorRegistry

logger = logging.getLogger(__name__)


class BuildState(str, Enum):
    IDLE = "idle"
    DRAFT_LOADING = "draft_loading"
    CHANGE_CHECK = "change_check"
    GENERATING = "generating"
    RECONCILING = "reconciling"
    WRITING = "writing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


def resolve_draft_path(settings: Settings, draft_path: str | Path | None) -> Path:
    """Explicit path, else the configured one; relative to the base path."""
    return settings.resolve(draft_path if draft_path else settings.draft_path)


def generate_candidates(
    registry: GeneratorRegistry,
    draft: Draft,
    draft_path: str,
    only: list[str] | None = None,
) -> list[GeneratedFile]:
    """Run every selected generator that supports the draft.

    Raises:
        GenerationError: On an unknown ``only`` name, a failing generator,
            or two generators claiming one path with different content.
    """
    generators, errors = registry.select(only)
    if errors:
        raise GenerationError("only", "; ".join(errors))

    candidates: list[GeneratedFile] = []
    for generator in generators:
        if not generator.supports(draft):
            logger.debug("Generator %s: not applicable", generator.name)
            continue
        try:
            produced = generator.generate(draft, draft_path)
        except GenerationError as e:
            if not e.generator:
                raise GenerationError(e.entity, e.message, generator.name) from e
            raise
        logger.debug("Generator %s: %d candidate(s)", generator.name, len(produced))
        candidates.extend(produced)
    return dedupe(candidates)


class BuildOrchestrator:
    """Runs one build at a time against one ledger."""

    def __init__(
        self,
        settings: Settings,
        ledger: StateLedger,
        registry: GeneratorRegistry,
        history: BuildHistory | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.ledger = ledger
        self.registry = registry
        self.history = history
        self._sleep = sleep
        self._state = BuildState.IDLE

    @property
    def state(self) -> BuildState:
        return self._state

    def _transition(self, state: BuildState) -> None:
        logger.debug("Build state: %s → %s", self._state.value, state.value)
        self._state = state

    def build(
        self,
        draft_path: str | Path | None = None,
        only: list[str] | None = None,
        force: bool = False,
    ) -> BuildResult:
        """Run the pipeline once.

        Args:
            draft_path: Draft file; defaults to ``settings.draft_path``.
            only: Restrict generation to these generator names. Bypasses
                the unchanged-draft short-circuit.
            force: Overwrite ``scaffold_only`` files that changed.

        Returns:
            BuildResult. Never raises for parse, generation, write or
            persist failures.
        """
        self._state = BuildState.IDLE
        path = resolve_draft_path(self.settings, draft_path)
        result = self._run(path, only or None, force)

        if result.success:
            logger.info(
                "Build %s: %d written, %d skipped, %d warning(s)",
                "unchanged" if result.no_changes else "done",
                len(result.generated),
                len(result.skipped),
                len(result.warnings),
            )
        else:
            logger.error("Build failed: %s", "; ".join(result.errors))

        if self.history is not None and self.settings.history.enabled:
            self.history.write(HistoryEntry.from_result(result, str(path), only or None, force))
        return result

    def _run(self, path: Path, only: list[str] | None, force: bool) -> BuildResult:
        key = str(path)

        # ── DraftLoading ────────────────────────────────────────
        self._transition(BuildState.DRAFT_LOADING)
        try:
            draft = load_draft(path)
        except DraftNotFound as e:
            return self._fail([str(e)])
        except DraftInvalid as e:
            return self._fail([f"{key}: {err}" for err in e.errors])

        # ── ChangeCheck ─────────────────────────────────────────
        self._transition(BuildState.CHANGE_CHECK)
        state = self.ledger.load()
        draft_hash = ChangeDetector.compute_draft_hash(path)
        changed = ChangeDetector(self.ledger).has_draft_changed(key, draft_hash, state.draft_hash(key))
        if not changed and not only:
            logger.info("Draft %s unchanged since last build", key)
            self._transition(BuildState.DONE)
            return BuildResult.no_changes_result()

        # ── Generating ──────────────────────────────────────────
        self._transition(BuildState.GENERATING)
        try:
            candidates = generate_candidates(self.registry, draft, key, only)
        except GenerationError as e:
            return self._fail([str(e)])

        # ── Reconciling ─────────────────────────────────────────
        self._transition(BuildState.RECONCILING)
        actions = reconcile(candidates, state, force)
        result = BuildResult(decisions=actions)
        to_write: list[GeneratedFile] = []
        for candidate, action in zip(candidates, actions):
            logger.debug("%s %s (%s)", action.decision.value, action.path, action.reason)
            if action.decision == Decision.WRITE:
                to_write.append(candidate)
                continue
            result.skipped.append(action.path)
            if action.decision == Decision.WARN:
                result.warnings.append(ownership_warning(action.path))

        # ── Writing ─────────────────────────────────────────────
        self._transition(BuildState.WRITING)
        try:
            self._write_all(to_write, result.backup)
        except WriteError as e:
            return self._fail([str(e)])
        result.generated = {c.path: c.to_record() for c in to_write}

        # ── Persisting ──────────────────────────────────────────
        self._transition(BuildState.PERSISTING)
        warning = self._persist(
            key,
            None if only else draft_hash,
            result,
            state,
        )
        if warning:
            result.warnings.append(warning)

        self._transition(BuildState.DONE)
        return result

    def _fail(self, errors: list[str]) -> BuildResult:
        self._transition(BuildState.FAILED)
        return BuildResult.failure(errors)

    def _write_all(self, files: list[GeneratedFile], backup: dict[str, str | None]) -> None:
        """Write every file, capturing prior content first.

        Raises:
            WriteError: After rolling back the files written so far.
        """
        written: list[str] = []
        for candidate in files:
            target = Path(candidate.path)
            try:
                previous = target.read_text(encoding="utf-8") if target.exists() else None
                backup[candidate.path] = previous
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(candidate.content, encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Write failed for %s: %s; rolling back %d file(s)", target, e, len(written))
                failed = rollback(written, backup)
                raise WriteError(candidate.path, e, failed) from e
            written.append(candidate.path)

    def _persist(
        self,
        key: str,
        draft_hash: str | None,
        result: BuildResult,
        state: LedgerState,
    ) -> str | None:
        """Save the ledger, retrying with exponential backoff.

        Returns:
            A warning message if every attempt failed, else None.
        """
        attempts = 1 + self.settings.ledger_persist_retries
        backup = dict(result.backup) if result.backup else None
        for attempt in range(1, attempts + 1):
            try:
                self.ledger.update(key, draft_hash, result.generated, state=state, backup=backup)
                return None
            except OSError as e:
                if attempt < attempts:
                    delay = self.settings.ledger_persist_backoff * (2 ** (attempt - 1))
                    logger.warning(
                        "Ledger save failed (attempt %d/%d), retrying in %.2fs: %s",
                        attempt, attempts, delay, e,
                    )
                    self._sleep(delay)
                    continue
                error = LedgerPersistError(
                    f"Could not persist state ledger {self.ledger.path} after {attempts} attempt(s): {e}"
                )
                logger.warning("%s", error)
                return str(error)
        return None


def rollback(paths: list[str], backup: dict[str, str | None]) -> list[str]:
    """Restore *paths* from *backup*, newest first.

    Files without prior content are deleted. Returns the paths that could
    not be restored.
    """
    failed = []
    for path in reversed(paths):
        previous = backup.get(path)
        target = Path(path)
        try:
            if previous is None:
                target.unlink(missing_ok=True)
            else:
                target.write_text(previous, encoding="utf-8")
        except OSError as e:
            logger.error("Rollback failed for %s: %s", path, e)
            failed.append(path)
    return failed
