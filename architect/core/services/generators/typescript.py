"""
TypeScript generator: one ``.d.ts`` file with an interface per model.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.columns import ColumnSpec, model_columns

TYPES_FILE = "resources/js/types/architect.d.ts"

_HEADER = """\
/**
 * Generated TypeScript interfaces for draft models.
 * Do not edit by hand; rebuild instead.
 */
"""

_TS_TYPES = {
    "integer": "number",
    "biginteger": "number",
    "decimal": "number",
    "boolean": "boolean",
    "json": "Record<string, unknown>",
}


class TypeScriptGenerator:
    name = "typescript"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models) and self.context.settings.conventions.generate_typescript_types

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        interfaces = [self._interface(draft, model) for model in draft.model_names()]
        content = _HEADER + "\n" + "\n\n".join(interfaces) + "\n"
        return [self.context.candidate(
            self.name,
            TYPES_FILE,
            content,
            FileOwnership.REGENERATE,
            reason="TypeScript model interfaces",
        )]

    def _interface(self, draft: Draft, model: str) -> str:
        columns = model_columns(draft, model, strict=self.context.settings.strict_columns)
        names = {c.name for c in columns}
        lines = ["id: number;"]
        lines.extend(ts_property(c) for c in columns if c.name != "id")
        if (draft.get_model(model) or {}).get("timestamps", True) is not False:
            lines.extend(f"{n}: string;" for n in ("created_at", "updated_at") if n not in names)
        lines.append("[key: string]: unknown;")
        body = "\n".join(f"    {line}" for line in lines)
        return f"export interface {model} {{\n{body}\n}}"


def ts_property(column: ColumnSpec) -> str:
    ts_type = "number" if column.references else _TS_TYPES.get(column.type, "string")
    optional = "?" if column.nullable else ""
    return f"{column.name}{optional}: {ts_type};"
