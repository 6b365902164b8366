"""
Build use cases: build, plan and revert.

Each call loads settings (unless given), builds the generator context
and registry once, and returns a result object. Fatal conditions come
back as errors on the result, never as exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from architect.core.config.loader import load_settings
from architect.core.engine.orchestrator import BuildOrchestrator
from architect.core.engine.planner import BuildPlanner
from architect.core.errors import ConfigError
from architect.core.models.build import BuildResult, PlanResult
from architect.core.models.settings import Settings
from architect.core.persistence.history import BuildHistory
from architect.core.persistence.state_file import StateLedger
from architect.core.services.generators.base import Extensions, GeneratorContext
from architect.core.services.generators.registry import GeneratorRegistry, default_registry

logger = logging.getLogger(__name__)


def prepare(
    settings: Settings,
    extensions: Extensions | None = None,
) -> tuple[StateLedger, GeneratorRegistry]:
    """Ledger and registry for one call."""
    ledger = StateLedger(settings.state_file)
    context = GeneratorContext.from_settings(settings, ledger=ledger, extensions=extensions)
    return ledger, default_registry(context)


def build(
    draft_path: str | Path | None = None,
    only: list[str] | None = None,
    force: bool = False,
    settings: Settings | None = None,
    extensions: Extensions | None = None,
) -> BuildResult:
    """Build the draft into source files."""
    try:
        settings = settings or load_settings()
    except ConfigError as e:
        return BuildResult.failure([str(e)])

    ledger, registry = prepare(settings, extensions)
    history = BuildHistory(settings.history_file, settings.history.max_entries)
    orchestrator = BuildOrchestrator(settings, ledger, registry, history=history)
    return orchestrator.build(draft_path, only=only, force=force)


def plan(
    draft_path: str | Path | None = None,
    only: list[str] | None = None,
    force: bool = False,
    settings: Settings | None = None,
    extensions: Extensions | None = None,
) -> PlanResult:
    """Preview the decisions a build would take."""
    try:
        settings = settings or load_settings()
    except ConfigError as e:
        return PlanResult(errors=[str(e)])

    ledger, registry = prepare(settings, extensions)
    return BuildPlanner(settings, ledger, registry).plan(draft_path, only=only, force=force)


@dataclass
class RevertResult:
    """Outcome of restoring the last build's backup."""

    restored: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def nothing_to_revert(self) -> bool:
        return not (self.restored or self.deleted or self.errors)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "restored": self.restored,
            "deleted": self.deleted,
            "errors": self.errors,
        }


def revert(settings: Settings | None = None) -> RevertResult:
    """Restore every file touched by the last successful build.

    Files that did not exist before that build are deleted. Paths outside
    the base path are refused. The stored backup is cleared afterwards.
    """
    result = RevertResult()
    try:
        settings = settings or load_settings()
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    ledger = StateLedger(settings.state_file)
    backup = ledger.get_last_build_backup()
    if not backup:
        logger.info("No build backup to revert")
        return result

    base = settings.base_path.resolve()
    for path, previous in backup.items():
        target = Path(path)
        if not target.resolve().is_relative_to(base):
            result.errors.append(f"Refusing to revert {path}: outside {base}")
            continue
        try:
            if previous is None:
                target.unlink(missing_ok=True)
                result.deleted.append(path)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(previous, encoding="utf-8")
                result.restored.append(path)
        except OSError as e:
            result.errors.append(f"Cannot revert {path}: {e}")

    try:
        ledger.clear_last_build_backup()
    except OSError as e:
        result.errors.append(f"Cannot clear build backup in {ledger.path}: {e}")

    logger.info("Reverted %d file(s), deleted %d", len(result.restored), len(result.deleted))
    return result
