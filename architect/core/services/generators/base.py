"""
Generator contract and the context every generator is built with.

A generator is any object with a ``name``, a cheap ``supports(draft)``
precondition and a ``generate(draft, draft_path)`` that returns candidate
files. Generators never touch the filesystem: the orchestrator decides
what gets written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from architect.core.errors import GenerationError
from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.models.settings import Settings
from architect.core.persistence.state_file import StateLedger
from architect.core.services.generators.variants import VariantResolver
from architect.core.services.ownership import OwnershipPolicy

logger = logging.getLogger(__name__)


@runtime_checkable
class Generator(Protocol):
    """One category of output file (model, migration, page, ...)."""

    name: str

    def supports(self, draft: Draft) -> bool: ...

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]: ...


GeneratorFactory = Callable[["GeneratorContext"], Generator]


@dataclass
class Extensions:
    """Project-level registrations: custom generators, stubs and validation rules.

    Built once at startup and handed to the registry and the generators,
    so registrations are visible for the whole run without process globals.
    """

    generators: dict[str, GeneratorFactory] = field(default_factory=dict)
    stubs: dict[str, Path] = field(default_factory=dict)
    validation_rules: dict[str, list[str]] = field(default_factory=dict)

    def register_generator(self, name: str, factory: GeneratorFactory) -> None:
        if name in self.generators:
            logger.warning("Overwriting custom generator: %s", name)
        self.generators[name] = factory

    def stub(self, name: str, path: Path) -> None:
        self.stubs[name] = path

    def get_stub(self, name: str) -> Path | None:
        return self.stubs.get(name)

    def validation_rule(self, column_type: str, rules: list[str]) -> None:
        self.validation_rules[column_type.lower()] = list(rules)

    def get_validation_rules(self, column_type: str) -> list[str] | None:
        return self.validation_rules.get(column_type.lower())


@dataclass
class GeneratorContext:
    """Everything a generator may consult besides the draft itself."""

    settings: Settings
    ledger: StateLedger
    variants: VariantResolver
    ownership: OwnershipPolicy
    extensions: Extensions = field(default_factory=Extensions)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        ledger: StateLedger | None = None,
        extensions: Extensions | None = None,
    ) -> GeneratorContext:
        return cls(
            settings=settings,
            ledger=ledger or StateLedger(settings.state_file),
            variants=VariantResolver(settings),
            ownership=OwnershipPolicy(settings.ownership, settings.base_path),
            extensions=extensions or Extensions(),
        )

    def output_path(self, relative: str) -> Path:
        return self.settings.resolve(relative)

    def candidate(
        self,
        generator: str,
        relative: str,
        content: str,
        ownership: FileOwnership,
        table: str | None = None,
        reason: str = "",
    ) -> GeneratedFile:
        """Build a candidate, applying the configured ownership overrides."""
        path = self.output_path(relative)
        return GeneratedFile(
            path=str(path),
            content=content,
            ownership=self.ownership.resolve(path, ownership),
            table=table,
            generator=generator,
            reason=reason,
        )

    def render(self, stub_name: str, default: str, values: dict[str, str]) -> str:
        """Fill ``{{placeholders}}`` in a registered stub, or in *default*.

        Raises:
            GenerationError: If a registered stub file cannot be read.
        """
        template = default
        custom = self.extensions.get_stub(stub_name)
        if custom is not None:
            try:
                template = custom.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise GenerationError(stub_name, f"cannot read stub {custom}: {e}") from e
        for key, value in values.items():
            template = template.replace("{{" + key + "}}", value)
        return template
