"""
Change detection: has the draft changed since the last recorded build?

Hashes the raw draft bytes rather than the parsed structure, so a
formatting-only edit still counts as a change and triggers reconciliation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from architect.core.persistence.state_file import StateLedger
from architect.core.services.hashing import hash_text

_UNSET: Any = object()


class ChangeDetector:
    """Compare draft hashes against the state ledger."""

    def __init__(self, ledger: StateLedger):
        self._ledger = ledger

    def has_draft_changed(self, draft_path: str, current_hash: str, recorded: str | None = _UNSET) -> bool:
        """True unless the ledger records exactly *current_hash* for *draft_path*.

        Args:
            draft_path: Draft file key in the ledger.
            current_hash: Freshly computed draft hash.
            recorded: Hash from an already-loaded ledger (None when nothing
                is recorded). Read from the ledger file when omitted.
        """
        if recorded is _UNSET:
            recorded = self._ledger.get_draft_hash(draft_path)
        return recorded is None or recorded != current_hash

    @staticmethod
    def compute_draft_hash(path: Path | str) -> str:
        """Hash the raw bytes of a draft file (an absent file hashes as empty)."""
        path = Path(path)
        content = path.read_bytes() if path.is_file() else b""
        return hash_text(content)
