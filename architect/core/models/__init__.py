"""
Domain models: pydantic types for the build pipeline.

All models are re-exported here for convenient access:

    from architect.core.models import Draft, LedgerState, BuildResult, Settings
"""

from architect.core.models.build import (
    BuildResult,
    Decision,
    GeneratedFile,
    PlannedAction,
    PlanResult,
)
from architect.core.models.draft import RESERVED_MODEL_KEYS, Draft
from architect.core.models.ledger import (
    DraftRecord,
    FileOwnership,
    GeneratedFileRecord,
    LedgerState,
)
from architect.core.models.settings import (
    AISettings,
    ConventionSettings,
    HistorySettings,
    Settings,
)

__all__ = [
    "AISettings",
    # build.py
    "BuildResult",
    "ConventionSettings",
    "Decision",
    # draft.py
    "Draft",
    "DraftRecord",
    # ledger.py
    "FileOwnership",
    "GeneratedFile",
    "GeneratedFileRecord",
    "HistorySettings",
    "LedgerState",
    "PlanResult",
    "PlannedAction",
    "RESERVED_MODEL_KEYS",
    # settings.py
    "Settings",
]
