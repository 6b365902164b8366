"""
Factory generator: one model factory per draft model.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.columns import ColumnSpec, model_columns

_FACTORY_STUB = """\
<?php

declare(strict_types=1);

namespace Database\\Factories;

use App\\Models\\{{model}};
use Illuminate\\Database\\Eloquent\\Factories\\Factory;

/**
 * @extends Factory<{{model}}>
 */
final class {{model}}Factory extends Factory
{
    protected $model = {{model}}::class;

    public function definition(): array
    {
        return [
{{definition}}
        ];
    }
}
"""

_FAKES = {
    "text": "fake()->paragraph()",
    "longtext": "fake()->paragraphs(3, true)",
    "integer": "fake()->numberBetween(1, 1000)",
    "biginteger": "fake()->numberBetween(1, 100000)",
    "decimal": "fake()->randomFloat(2, 0, 1000)",
    "boolean": "fake()->boolean()",
    "date": "fake()->date()",
    "datetime": "fake()->dateTime()",
    "timestamp": "fake()->dateTime()",
    "json": "[]",
    "uuid": "fake()->uuid()",
    "email": "fake()->unique()->safeEmail()",
    "password": "bcrypt('password')",
}

# Column names that imply a better fake than their type does.
_NAME_HINTS = {
    "email": "fake()->unique()->safeEmail()",
    "name": "fake()->name()",
    "title": "fake()->sentence(4)",
    "slug": "fake()->unique()->slug()",
    "url": "fake()->url()",
    "phone": "fake()->phoneNumber()",
}


class FactoryGenerator:
    name = "factory"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        for model in draft.model_names():
            columns = model_columns(draft, model, strict=self.context.settings.strict_columns)
            definition = "\n".join(f"            {fake_line(c)}" for c in columns)
            content = self.context.render("factory.stub", _FACTORY_STUB, {
                "model": model,
                "definition": definition,
            })
            files.append(self.context.candidate(
                self.name,
                f"database/factories/{model}Factory.php",
                content,
                FileOwnership.REGENERATE,
                reason=f"Factory for {model}",
            ))
        return files


def fake_line(column: ColumnSpec) -> str:
    if column.references:
        value = f"\\App\\Models\\{column.references}::factory()"
    elif column.type == "string" and column.name in _NAME_HINTS:
        value = _NAME_HINTS[column.name]
    elif column.type in _FAKES:
        value = _FAKES[column.type]
    else:
        value = "fake()->words(3, true)"
    if column.nullable and not column.references:
        value = f"fake()->optional()->passthrough({value})"
    return f"'{column.name}' => {value},"
