"""
Error taxonomy for the build pipeline.

Fatal conditions are raised as ``ArchitectError`` subclasses and turned
into failed ``BuildResult`` values by the orchestrator. Ownership
conflicts are not errors: they only ever surface as warnings.
"""

from __future__ import annotations


class ArchitectError(Exception):
    """Base class for every error raised by the build pipeline."""


class ConfigError(ArchitectError):
    """Raised when architect.yml is unreadable or invalid."""


class DraftNotFound(ArchitectError):
    """Raised when the draft path does not resolve to an existing file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Draft file not found: {path}")


class DraftInvalid(ArchitectError):
    """Raised when a draft is malformed or fails schema validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors if errors is not None else [message]
        super().__init__(message)


class GenerationError(ArchitectError):
    """Raised by a generator that cannot render output for an entity."""

    def __init__(self, entity: str, message: str, generator: str = ""):
        self.entity = entity
        self.message = message
        self.generator = generator
        prefix = f"{generator}: " if generator else ""
        super().__init__(f"{prefix}{entity}: {message}")


class WriteError(ArchitectError):
    """Raised when an output file cannot be written.

    ``rollback_failed`` lists files that could not be restored afterwards.
    """

    def __init__(self, path: str, cause: Exception, rollback_failed: list[str] | None = None):
        self.path = path
        self.cause = cause
        self.rollback_failed = rollback_failed or []
        message = f"Cannot write {path}: {cause}"
        if self.rollback_failed:
            message += f"; rollback failed for {', '.join(self.rollback_failed)}"
        super().__init__(message)


class LedgerPersistError(ArchitectError):
    """Raised when the state ledger cannot be saved."""
