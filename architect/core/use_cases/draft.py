"""
Draft use case: generate draft YAML from a description.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from architect.core.config.loader import load_settings
from architect.core.errors import ConfigError
from architect.core.models.settings import Settings
from architect.core.services.drafting import DraftBackend, DraftGenerator

logger = logging.getLogger(__name__)


@dataclass
class DraftResult:
    yaml: str = ""
    source: str = ""
    attempts: int = 0
    attempt_errors: list[list[str]] = field(default_factory=list)
    output: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "source": self.source,
            "attempts": self.attempts,
            "attempt_errors": self.attempt_errors,
            "output": self.output,
            "yaml": self.yaml,
        }


def backend_for(settings: Settings) -> DraftBackend | None:
    """The configured backend, or None to draft from the local template.

    Only the template ships with the tool; other providers are injected
    by callers through ``draft(backend=...)``.
    """
    provider = settings.ai.provider
    if provider != "template":
        logger.warning("Drafting provider '%s' is not installed; using the template", provider)
    return None


def draft(
    description: str,
    existing_draft_path: str | Path | None = None,
    output: str | Path | None = None,
    backend: DraftBackend | None = None,
    settings: Settings | None = None,
) -> DraftResult:
    """Generate a draft and optionally write it to *output*.

    Args:
        description: What the application should contain.
        existing_draft_path: Draft to extend; its YAML is passed to the backend.
        output: File to write; relative to the base path. Not written when None.
        backend: Drafting backend; defaults to the configured one.
    """
    result = DraftResult()
    try:
        settings = settings or load_settings()
    except ConfigError as e:
        result.error = str(e)
        return result

    existing_yaml = None
    if existing_draft_path:
        existing = settings.resolve(existing_draft_path)
        if existing.is_file():
            existing_yaml = existing.read_text(encoding="utf-8")

    generator = DraftGenerator(backend or backend_for(settings), settings.ai)
    generated = generator.generate(description, existing_yaml)
    result.yaml = generated.yaml
    result.source = generated.source
    result.attempts = len(generated.attempts)
    result.attempt_errors = [a.errors for a in generated.attempts]

    if output:
        target = settings.resolve(output)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(generated.yaml, encoding="utf-8")
        except OSError as e:
            result.error = f"Cannot write {target}: {e}"
            return result
        result.output = str(target)
        logger.info("Draft written to %s (%s)", target, generated.source)
    return result
