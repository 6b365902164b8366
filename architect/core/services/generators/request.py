"""
Form request generator: Store and Update requests per draft model.

Rules come from the ``validation`` settings map, overridden per column
type by registered extension rules. Column modifiers adjust them:
``nullable`` swaps ``required`` for ``nullable``, ``unique`` adds a
table uniqueness rule, and ``id:Model`` becomes an ``exists`` rule.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.columns import ColumnSpec, model_columns
from architect.core.services.strings import camel_case, table_name

_REQUEST_STUB = """\
<?php

declare(strict_types=1);

namespace App\\Http\\Requests;

use Illuminate\\Foundation\\Http\\FormRequest;
use Illuminate\\Validation\\Rule;

final class {{class}} extends FormRequest
{
    public function authorize(): bool
    {
        return true;
    }

    /**
     * @return array<string, mixed>
     */
    public function rules(): array
    {
        return [
{{rules}}
        ];
    }
}
"""

_FALLBACK_RULES = ["required"]


class RequestGenerator:
    name = "request"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        for model in draft.model_names():
            columns = model_columns(draft, model, strict=self.context.settings.strict_columns)
            table = table_name(model)
            for action in ("Store", "Update"):
                ignore = camel_case(model) if action == "Update" else None
                lines = [
                    f"            '{c.name}' => [{', '.join(_php_rule(r, ignore) for r in self.rules_for(c, table))}],"
                    for c in columns
                ]
                class_name = f"{action}{model}Request"
                content = self.context.render("request.stub", _REQUEST_STUB, {
                    "class": class_name,
                    "rules": "\n".join(lines),
                })
                files.append(self.context.candidate(
                    self.name,
                    f"app/Http/Requests/{class_name}.php",
                    content,
                    FileOwnership.SCAFFOLD_ONLY,
                    reason=f"{action} validation for {model}",
                ))
        return files

    def rules_for(self, column: ColumnSpec, table: str) -> list[str]:
        """Validation rules for one column, as Laravel rule strings."""
        if column.references:
            rules = ["required", "integer", f"exists:{column.references_table},id"]
        else:
            custom = self.context.extensions.get_validation_rules(column.type)
            configured = self.context.settings.validation.get(column.type)
            rules = list(custom or configured or _FALLBACK_RULES)
            if column.type == "string" and column.arg:
                rules = [r for r in rules if not r.startswith("max:")] + [f"max:{column.arg}"]

        if column.nullable:
            rules = ["nullable"] + [r for r in rules if r not in ("required", "nullable")]
        if column.unique:
            rules.append(f"unique:{table},{column.name}")
        return rules


def _php_rule(rule: str, ignore: str | None) -> str:
    """Render a rule string as PHP; update requests ignore the bound row on unique."""
    if ignore and rule.startswith("unique:"):
        table, _, column = rule[len("unique:"):].partition(",")
        return f"Rule::unique('{table}', '{column}')->ignore($this->route('{ignore}'))"
    return f"'{rule}'"
