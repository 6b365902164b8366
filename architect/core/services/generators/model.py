"""
Model generator: one Eloquent model class per draft model.

Fillable attributes, casts, traits and relationship methods are derived
from the column specs and the nested ``relationships`` / ``traits`` /
``softDeletes`` hints.
"""

from __future__ import annotations

from architect.core.errors import GenerationError
from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.columns import ColumnSpec, model_columns, parse_relationships

_MODEL_STUB = """\
<?php

declare(strict_types=1);

namespace App\\Models;

use Illuminate\\Database\\Eloquent\\Model;

final class {{class}} extends Model
{
    {{traits}}protected $fillable = {{fillable}};

    protected function casts(): array
    {
        {{casts}}
    }
{{relationships}}}
"""

_RELATION_TYPES = {
    "belongsTo": "BelongsTo",
    "hasMany": "HasMany",
    "hasOne": "HasOne",
    "belongsToMany": "BelongsToMany",
}

_CASTS = {
    "timestamp": "datetime",
    "datetime": "datetime",
    "date": "date",
    "boolean": "boolean",
    "json": "array",
    "decimal": "decimal:2",
    "password": "hashed",
}


class ModelGenerator:
    name = "model"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        for model in draft.model_names():
            columns = model_columns(draft, model, strict=self.context.settings.strict_columns)
            content = self.context.render("model.stub", _MODEL_STUB, {
                "class": model,
                "traits": _format_traits(draft, model),
                "fillable": _format_fillable(columns),
                "casts": _format_casts(columns),
                "relationships": _format_relationships(draft, model),
            })
            files.append(self.context.candidate(
                self.name,
                f"app/Models/{model}.php",
                content,
                FileOwnership.SCAFFOLD_ONLY,
                reason=f"Model for {model}",
            ))
        return files


def _format_fillable(columns: list[ColumnSpec]) -> str:
    if not columns:
        return "[]"
    items = "".join(f"        '{c.name}',\n" for c in columns)
    return f"[\n{items}    ]"


def _format_casts(columns: list[ColumnSpec]) -> str:
    casts = [(c.name, _CASTS[c.type]) for c in columns if c.type in _CASTS]
    if not casts:
        return "return [];"
    lines = "".join(f"            '{name}' => '{cast}',\n" for name, cast in casts)
    return f"return [\n{lines}        ];"


def _format_traits(draft: Draft, model: str) -> str:
    definition = draft.get_model(model) or {}
    traits = definition.get("traits") or []
    if not isinstance(traits, list) or not all(isinstance(t, str) for t in traits):
        raise GenerationError(model, "'traits' must be a list of class names")
    traits = list(traits)
    if definition.get("softDeletes"):
        traits.append("\\Illuminate\\Database\\Eloquent\\SoftDeletes")
    if not traits:
        return ""
    return "".join(f"use {t};\n    " for t in traits) + "\n    "


def _format_relationships(draft: Draft, model: str) -> str:
    blocks = []
    for kind, target, method in parse_relationships(draft, model):
        return_type = _RELATION_TYPES.get(kind)
        if return_type is None:
            raise GenerationError(model, f"unknown relationship type '{kind}'")
        blocks.append(
            f"\n    public function {method}(): "
            f"\\Illuminate\\Database\\Eloquent\\Relations\\{return_type}\n"
            "    {\n"
            f"        return $this->{kind}({target}::class);\n"
            "    }\n"
        )
    return "".join(blocks)
