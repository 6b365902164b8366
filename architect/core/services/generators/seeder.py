"""
Seeder generator: seeders for models that carry a ``seeder`` hint.

    seeder:
      category: development   # essential | development | production
      count: 10
      json: true              # also seed rows from database/seeders/data/<table>.json
"""

from __future__ import annotations

from typing import Any

from architect.core.errors import GenerationError
from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.strings import pluralize, table_name

_SEEDER_STUB = """\
<?php

declare(strict_types=1);

namespace Database\\Seeders\\{{category}};

use App\\Models\\{{model}};
use Illuminate\\Database\\Seeder;

final class {{class}} extends Seeder
{
    public function run(): void
    {
{{body}}
    }
}
"""

_JSON_BODY = """\
        $path = database_path('seeders/data/{table}.json');
        if (is_file($path)) {{
            $rows = json_decode((string) file_get_contents($path), true);
            foreach ($rows['{table}'] ?? [] as $row) {{
                {model}::query()->updateOrCreate($row);
            }}
        }}
"""


class SeederGenerator:
    name = "seeder"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return any(isinstance((draft.get_model(m) or {}).get("seeder"), dict) for m in draft.model_names())

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        for model in draft.model_names():
            config = (draft.get_model(model) or {}).get("seeder")
            if not isinstance(config, dict):
                continue
            category = self._category(config.get("category"))
            count = _count(model, config.get("count", 5))
            table = table_name(model)
            class_name = f"{pluralize(model)}Seeder"

            body = _JSON_BODY.format(table=table, model=model) if config.get("json") else ""
            body += f"        {model}::factory()->count({count})->create();"

            content = self.context.render("seeder.stub", _SEEDER_STUB, {
                "category": category,
                "model": model,
                "class": class_name,
                "body": body,
            })
            files.append(self.context.candidate(
                self.name,
                f"database/seeders/{category}/{class_name}.php",
                content,
                FileOwnership.REGENERATE,
                reason=f"{category} seeder for {model}",
            ))
        return files

    def _category(self, value: Any) -> str:
        conventions = self.context.settings.conventions
        categories = {c.lower(): c for c in conventions.seeder_categories}
        if isinstance(value, str) and value.lower() in categories:
            return categories[value.lower()]
        return conventions.default_seeder_category


def _count(model: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise GenerationError(model, f"seeder count must be a non-negative integer, got {value!r}")
    return value
