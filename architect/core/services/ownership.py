"""
Ownership policy: which generated files may be overwritten on rebuild.

Generators declare a default ownership per candidate; the project's
``ownership`` glob map (relative to the base path) overrides it. The
first matching pattern wins, in configuration order.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath

from architect.core.models.ledger import FileOwnership


class OwnershipPolicy:
    """Resolve the effective ownership of an output path."""

    def __init__(self, patterns: dict[str, FileOwnership], base_path: Path):
        self._patterns = list(patterns.items())
        self._base_path = base_path

    def resolve(self, path: str | Path, default: FileOwnership) -> FileOwnership:
        relative = self._relative(Path(path))
        if relative is None:
            return default
        for pattern, ownership in self._patterns:
            if fnmatchcase(relative, pattern):
                return FileOwnership(ownership)
        return default

    def _relative(self, path: Path) -> str | None:
        if not path.is_absolute():
            return PurePosixPath(path).as_posix()
        try:
            return path.relative_to(self._base_path).as_posix()
        except ValueError:
            return None
