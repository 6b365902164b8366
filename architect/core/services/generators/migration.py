"""
Migration generator: one create-table migration per draft model.

A table that already has a recorded migration keeps that path, so a
changed model rewrites its migration in place instead of adding a new
one. New migrations get a position-based name, never a wall-clock one.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.columns import ColumnSpec, model_columns
from architect.core.services.strings import table_name

MIGRATIONS_DIR = "database/migrations"

_MIGRATION_STUB = """\
<?php

declare(strict_types=1);

use Illuminate\\Database\\Migrations\\Migration;
use Illuminate\\Database\\Schema\\Blueprint;
use Illuminate\\Support\\Facades\\Schema;

return new class extends Migration
{
    public function up(): void
    {
        Schema::create('{{table}}', function (Blueprint $table): void {
            $table->id();
{{columns}}
        });
    }

    public function down(): void
    {
        Schema::dropIfExists('{{table}}');
    }
};
"""

_SIMPLE_TYPES = {
    "text": "text",
    "longtext": "longText",
    "integer": "integer",
    "biginteger": "unsignedBigInteger",
    "boolean": "boolean",
    "date": "date",
    "datetime": "timestamp",
    "timestamp": "timestamp",
    "json": "json",
    "uuid": "uuid",
}


class MigrationGenerator:
    name = "migration"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        for position, model in enumerate(draft.model_names(), start=1):
            table = table_name(model)
            columns = model_columns(draft, model, strict=self.context.settings.strict_columns)
            content = self.context.render("migration.stub", _MIGRATION_STUB, {
                "table": table,
                "columns": _column_block(draft, model, columns),
            })
            files.append(self.context.candidate(
                self.name,
                self._relative_path(table, position),
                content,
                FileOwnership.REGENERATE,
                table=table,
                reason=f"Create table {table}",
            ))
        return files

    def _relative_path(self, table: str, position: int) -> str:
        existing = self.context.ledger.get_generated_path_for_table(table)
        if existing is not None:
            return existing
        return f"{MIGRATIONS_DIR}/0001_01_01_{position:06d}_create_{table}_table.php"


def column_statement(column: ColumnSpec) -> str:
    """Render one ``$table->...`` schema builder statement."""
    if column.references:
        return (
            f"$table->foreignId('{column.name}')"
            f"->constrained('{column.references_table}')->cascadeOnDelete();"
        )

    if column.type == "decimal":
        precision, scale = 10, 2
        if column.arg and "," in column.arg:
            p, s = column.arg.split(",", 1)
            precision, scale = int(p.strip() or 10), int(s.strip() or 2)
        php = f"$table->decimal('{column.name}', {precision}, {scale})"
    elif column.type in _SIMPLE_TYPES:
        php = f"$table->{_SIMPLE_TYPES[column.type]}('{column.name}')"
    else:
        length = int(column.arg) if column.arg and column.arg.isdigit() else 255
        php = f"$table->string('{column.name}', {length})"

    if column.nullable:
        php += "->nullable()"
    if column.unique:
        php += "->unique()"
    elif column.index:
        php += "->index()"
    return php + ";"


def _column_block(draft: Draft, model: str, columns: list[ColumnSpec]) -> str:
    definition = draft.get_model(model) or {}
    lines = [column_statement(c) for c in columns]
    if definition.get("timestamps", True) is not False:
        lines.append("$table->timestamps();")
    if definition.get("softDeletes"):
        lines.append("$table->softDeletes();")
    return "\n".join(f"            {line}" for line in lines)
