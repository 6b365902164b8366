"""
Validate use case: check a draft without generating anything.
"""

from __future__ import annotations

from pathlib import Path

from architect.core.config.draft_loader import load_draft
from architect.core.config.loader import load_settings
from architect.core.engine.orchestrator import resolve_draft_path
from architect.core.errors import ConfigError, DraftInvalid, DraftNotFound
from architect.core.models.settings import Settings


def validate(draft_path: str | Path | None = None, settings: Settings | None = None) -> list[str]:
    """Return validation errors for a draft; an empty list means valid."""
    try:
        settings = settings or load_settings()
    except ConfigError as e:
        return [str(e)]

    path = resolve_draft_path(settings, draft_path)
    try:
        load_draft(path)
    except DraftNotFound as e:
        return [str(e)]
    except DraftInvalid as e:
        return list(e.errors)
    return []
