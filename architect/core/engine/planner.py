"""
Build planner: what a build would do, without doing it.

Loads the draft, evaluates the change check, runs the generators and
reconciles against the ledger exactly like the orchestrator, then stops.
Nothing is written and the ledger is never saved.
"""

from __future__ import annotations

import logging
from pathlib import Path

from architect.core.config.draft_loader import load_draft
from architect.core.engine.orchestrator import generate_candidates, resolve_draft_path
from architect.core.engine.reconcile import reconcile
from architect.core.errors import DraftInvalid, DraftNotFound, GenerationError
from architect.core.models.build import PlanResult
from architect.core.models.settings import Settings
from architect.core.persistence.state_file import StateLedger
from architect.core.services.change_detector import ChangeDetector
from architect.core.services.generators.registry import GeneratorRegistry

logger = logging.getLogger(__name__)


class BuildPlanner:
    """Read-only mirror of the build pipeline."""

    def __init__(self, settings: Settings, ledger: StateLedger, registry: GeneratorRegistry):
        self.settings = settings
        self.ledger = ledger
        self.registry = registry

    def plan(
        self,
        draft_path: str | Path | None = None,
        only: list[str] | None = None,
        force: bool = False,
    ) -> PlanResult:
        path = resolve_draft_path(self.settings, draft_path)
        key = str(path)
        result = PlanResult(draft_path=key)

        try:
            draft = load_draft(path)
        except DraftNotFound as e:
            result.errors.append(str(e))
            return result
        except DraftInvalid as e:
            result.errors.extend(f"{key}: {err}" for err in e.errors)
            return result

        state = self.ledger.load()
        draft_hash = ChangeDetector.compute_draft_hash(path)
        changed = ChangeDetector(self.ledger).has_draft_changed(key, draft_hash, state.draft_hash(key))
        if not changed and not only:
            result.would_short_circuit = True
            return result

        try:
            candidates = generate_candidates(self.registry, draft, key, only or None)
        except GenerationError as e:
            result.errors.append(str(e))
            return result

        result.actions = reconcile(candidates, state, force)
        logger.debug("Plan for %s: %d action(s)", key, len(result.actions))
        return result
