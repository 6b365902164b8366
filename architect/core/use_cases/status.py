"""
Status use case: summarize the state ledger and recent builds.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from architect.core.config.loader import load_settings
from architect.core.engine.orchestrator import resolve_draft_path
from architect.core.errors import ConfigError
from architect.core.models.ledger import LedgerState
from architect.core.models.settings import Settings
from architect.core.persistence.history import BuildHistory, HistoryEntry
from architect.core.persistence.state_file import StateLedger
from architect.core.services.change_detector import ChangeDetector


@dataclass
class StatusResult:
    """Ledger summary for one project."""

    state: LedgerState | None = None
    state_path: str = ""
    draft_path: str = ""
    draft_changed: bool | None = None     # None when the draft file is missing
    recent_builds: list[HistoryEntry] = field(default_factory=list)
    error: str | None = None

    @property
    def file_count(self) -> int:
        return len(self.state.generated) if self.state else 0

    def counts_by_ownership(self) -> dict[str, int]:
        if not self.state:
            return {}
        return dict(Counter(r.ownership.value for r in self.state.generated.values()))

    def counts_by_generator(self) -> dict[str, int]:
        if not self.state:
            return {}
        return dict(Counter(r.generator or "unknown" for r in self.state.generated.values()))

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}
        state = self.state or LedgerState()
        return {
            "state_path": self.state_path,
            "draft_path": self.draft_path,
            "draft_changed": self.draft_changed,
            "version": state.version,
            "last_run": state.last_run,
            "files": self.file_count,
            "by_ownership": self.counts_by_ownership(),
            "by_generator": self.counts_by_generator(),
            "revertible": len(state.last_build_backup),
            "recent_builds": [e.model_dump(mode="json") for e in self.recent_builds],
        }


def get_status(settings: Settings | None = None, recent: int = 5) -> StatusResult:
    """Load the ledger and compare the configured draft against it."""
    result = StatusResult()
    try:
        settings = settings or load_settings()
    except ConfigError as e:
        result.error = str(e)
        return result

    ledger = StateLedger(settings.state_file)
    result.state = ledger.load()
    result.state_path = str(ledger.path)

    draft = resolve_draft_path(settings, None)
    result.draft_path = str(draft)
    if draft.is_file():
        current = ChangeDetector.compute_draft_hash(draft)
        result.draft_changed = ChangeDetector(ledger).has_draft_changed(
            str(draft), current, result.state.draft_hash(str(draft))
        )

    if settings.history.enabled:
        history = BuildHistory(settings.history_file, settings.history.max_entries)
        result.recent_builds = history.read_recent(recent)
    return result
