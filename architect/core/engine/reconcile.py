"""
Reconciliation: decide, per candidate file, whether a build writes it.

Shared by the orchestrator and the planner so a plan always lists
exactly the decisions a build would take.

    path not in ledger                     → write (new)
    regenerate, same hash as ledger        → skip (unchanged)
    regenerate, different hash             → write (changed)
    scaffold_only, same hash               → skip (unchanged)
    scaffold_only, different hash          → warn and skip, or write if forced

A path is scaffold_only when either its record or its candidate says so.
"""

from __future__ import annotations

from architect.core.errors import GenerationError
from architect.core.models.build import Decision, GeneratedFile, PlannedAction
from architect.core.models.ledger import FileOwnership, LedgerState


def ownership_warning(path: str) -> str:
    return (
        f"Skipped {path}: file is scaffold_only and was already generated. "
        "Use --force to overwrite."
    )


def dedupe(candidates: list[GeneratedFile]) -> list[GeneratedFile]:
    """Drop repeated candidates for one path.

    Raises:
        GenerationError: If two candidates target one path with different content.
    """
    seen: dict[str, GeneratedFile] = {}
    for candidate in candidates:
        previous = seen.get(candidate.path)
        if previous is None:
            seen[candidate.path] = candidate
        elif previous.hash != candidate.hash:
            raise GenerationError(
                candidate.path,
                f"conflicting output from '{previous.generator}' and '{candidate.generator}'",
                candidate.generator,
            )
    return list(seen.values())


def reconcile(
    candidates: list[GeneratedFile],
    state: LedgerState,
    force: bool = False,
) -> list[PlannedAction]:
    """Return one decision per candidate, in candidate order."""
    actions = []
    for candidate in candidates:
        record = state.generated.get(candidate.path)
        if record is None:
            decision, reason = Decision.WRITE, "new"
        elif record.hash == candidate.hash:
            decision, reason = Decision.SKIP, "unchanged"
        elif FileOwnership.SCAFFOLD_ONLY in (candidate.ownership, record.ownership):
            if force:
                decision, reason = Decision.WRITE, "forced"
            else:
                decision, reason = Decision.WARN, "scaffold_only"
        else:
            decision, reason = Decision.WRITE, "changed"

        actions.append(PlannedAction(
            path=candidate.path,
            generator=candidate.generator,
            decision=decision,
            reason=reason,
            ownership=candidate.ownership,
        ))
    return actions
