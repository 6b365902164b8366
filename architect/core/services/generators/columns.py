"""
Column spec parsing shared by the model-driven generators.

A column spec is ``type[:arg] [modifiers...]``, for example
``string:255``, ``timestamp nullable`` or ``id:User foreign``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from architect.core.errors import GenerationError
from architect.core.models.draft import Draft
from architect.core.services.strings import camel_case, table_name

KNOWN_TYPES = frozenset({
    "string",
    "text",
    "longtext",
    "integer",
    "biginteger",
    "decimal",
    "boolean",
    "date",
    "datetime",
    "timestamp",
    "json",
    "uuid",
    "email",
    "password",
    "id",
})

_MODIFIERS = ("nullable", "unique", "index", "foreign")

_DECIMAL_ARG = re.compile(r"^\s*\d+\s*,\s*\d+\s*$")


@dataclass(frozen=True)
class ColumnSpec:
    """One parsed column of a draft model."""

    name: str
    type: str                       # lower-cased type keyword
    arg: str | None = None
    nullable: bool = False
    unique: bool = False
    index: bool = False
    foreign: bool = False
    references: str | None = None   # target model of an id:Model column

    @property
    def references_table(self) -> str | None:
        return table_name(self.references) if self.references else None


def parse_column(entity: str, name: str, definition: Any, strict: bool = False) -> ColumnSpec:
    """Parse one column definition.

    Args:
        entity: Owning model name, reported on failure.
        name: Column name.
        definition: Raw spec from the draft.
        strict: Fail on unknown types instead of falling back to ``string``.

    Raises:
        GenerationError: If the spec is empty, not a string, or unparseable.
    """
    if not isinstance(definition, str):
        raise GenerationError(
            entity,
            f"column '{name}' must be a type string, got {type(definition).__name__}",
        )

    parts = definition.strip().split(None, 1)
    if not parts:
        raise GenerationError(entity, f"column '{name}' has an empty type")

    type_part = parts[0]
    modifiers = parts[1].split() if len(parts) > 1 else []
    unknown = [m for m in modifiers if m not in _MODIFIERS]
    if strict and unknown:
        raise GenerationError(entity, f"column '{name}' has unknown modifiers: {', '.join(unknown)}")

    kind, _, arg = type_part.partition(":")
    kind = kind.lower()
    if not kind:
        raise GenerationError(entity, f"column '{name}' has an empty type in '{definition}'")

    references = None
    if kind == "id":
        if not arg:
            raise GenerationError(entity, f"column '{name}' uses 'id' without a target model")
        references = arg.strip()
    elif kind not in KNOWN_TYPES:
        if strict:
            raise GenerationError(entity, f"column '{name}' has unknown type '{kind}'")
        kind, arg = "string", ""

    if arg and kind == "string" and not arg.isdigit():
        raise GenerationError(entity, f"column '{name}' has a non-numeric length '{arg}'")
    if arg and kind == "decimal" and not _DECIMAL_ARG.match(arg):
        raise GenerationError(entity, f"column '{name}' needs 'decimal:precision,scale', got '{arg}'")

    return ColumnSpec(
        name=name,
        type=kind,
        arg=arg or None,
        nullable="nullable" in modifiers,
        unique="unique" in modifiers,
        index="index" in modifiers,
        foreign="foreign" in modifiers or kind == "id",
        references=references,
    )


def model_columns(draft: Draft, model: str, strict: bool = False) -> list[ColumnSpec]:
    """Parse every column of *model* in declaration order."""
    return [
        parse_column(model, str(name), definition, strict=strict)
        for name, definition in draft.columns(model).items()
    ]


def parse_relationships(draft: Draft, model: str) -> list[tuple[str, str, str]]:
    """Return ``(kind, target_model, method)`` triples for *model*.

    Targets may be comma-separated and aliased: ``hasMany: Comment, Tag:labels``.
    """
    out: list[tuple[str, str, str]] = []
    for kind, targets in draft.relationships(model).items():
        items = targets if isinstance(targets, list) else [targets]
        for item in items:
            if not isinstance(item, str):
                raise GenerationError(model, f"relationship '{kind}' target must be a string")
            for entry in (part.strip() for part in item.split(",")):
                if not entry:
                    continue
                target, _, method = entry.partition(":")
                target = target.strip()
                out.append((str(kind), target, method.strip() or camel_case(target)))
    return out
