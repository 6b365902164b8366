"""
Settings: the tool configuration, loaded from architect.yml.

Every value has a default so a project without architect.yml still
builds. Relative paths resolve against ``base_path``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from architect.core.models.ledger import FileOwnership

DEFAULT_OWNERSHIP: dict[str, FileOwnership] = {
    "database/migrations/*": FileOwnership.REGENERATE,
    "database/factories/*": FileOwnership.REGENERATE,
    "database/seeders/data/*.json": FileOwnership.REGENERATE,
    "app/Models/*": FileOwnership.SCAFFOLD_ONLY,
    "app/Actions/*": FileOwnership.SCAFFOLD_ONLY,
    "app/Http/Controllers/*": FileOwnership.SCAFFOLD_ONLY,
    "app/Http/Requests/*": FileOwnership.SCAFFOLD_ONLY,
    "app/Policies/*": FileOwnership.SCAFFOLD_ONLY,
    "resources/js/pages/*": FileOwnership.SCAFFOLD_ONLY,
    "tests/*": FileOwnership.SCAFFOLD_ONLY,
}

DEFAULT_VALIDATION: dict[str, list[str]] = {
    "string": ["required", "string", "max:255"],
    "text": ["required", "string"],
    "longtext": ["required", "string"],
    "integer": ["required", "integer"],
    "biginteger": ["required", "integer"],
    "decimal": ["required", "numeric"],
    "boolean": ["required", "boolean"],
    "date": ["required", "date"],
    "datetime": ["required", "date"],
    "timestamp": ["nullable", "date"],
    "email": ["required", "string", "email", "max:255"],
    "password": ["required", "confirmed"],
    "uuid": ["required", "uuid"],
    "json": ["required", "array"],
}


class ConventionSettings(BaseModel):
    """Code conventions applied by the generators."""

    generate_api: bool = False
    api_version: str = "v1"
    api_auth: str = "none"                  # sanctum, passport, none
    generate_tests: bool = True
    test_framework: str = "pest"            # pest, phpunit
    generate_typescript_types: bool = True
    seeder_categories: list[str] = Field(
        default_factory=lambda: ["Essential", "Development", "Production"]
    )
    default_seeder_category: str = "Development"


class AISettings(BaseModel):
    """Drafting backend knobs."""

    enabled: bool = True
    provider: str = "template"
    model: str | None = None
    max_retries: int = Field(default=2, ge=0)
    retry_with_feedback: bool = True


class HistorySettings(BaseModel):
    """Build history (append-only NDJSON)."""

    enabled: bool = True
    path: str = ".architect/history.ndjson"
    max_entries: int = Field(default=100, ge=1)


class Settings(BaseModel):
    """Root configuration for one project."""

    base_path: Path = Field(default_factory=Path.cwd)
    draft_path: str = "draft.yaml"
    state_path: str = ".architect-state.json"

    stack: str = "inertia-react"            # inertia-react, inertia-vue, livewire, volt, blade
    strict_columns: bool = False            # unknown column types fail instead of falling back

    ownership: dict[str, FileOwnership] = Field(default_factory=lambda: dict(DEFAULT_OWNERSHIP))
    validation: dict[str, list[str]] = Field(default_factory=lambda: dict(DEFAULT_VALIDATION))
    conventions: ConventionSettings = Field(default_factory=ConventionSettings)
    ai: AISettings = Field(default_factory=AISettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    # Ledger save attempts after the first failure, with exponential backoff.
    ledger_persist_retries: int = Field(default=2, ge=0)
    ledger_persist_backoff: float = Field(default=0.05, ge=0)

    def resolve(self, path: str | Path) -> Path:
        """Resolve *path* against the base path unless already absolute."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.base_path / candidate

    @property
    def draft_file(self) -> Path:
        return self.resolve(self.draft_path)

    @property
    def state_file(self) -> Path:
        return self.resolve(self.state_path)

    @property
    def history_file(self) -> Path:
        return self.resolve(self.history.path)
