"""
Draft model: the parsed, in-memory form of draft.yaml.

Pure data with a few lookups. Mapping order follows the YAML document
so generators emit output in a stable, author-controlled order.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Keys inside a model definition that are generation hints, not columns.
RESERVED_MODEL_KEYS = frozenset({"relationships", "seeder", "softDeletes", "timestamps", "traits"})


class Draft(BaseModel):
    """Models, actions, pages and route overrides declared in a draft."""

    model_config = ConfigDict(frozen=True)

    models: dict[str, dict[str, Any]] = Field(default_factory=dict)
    actions: dict[str, dict[str, Any]] = Field(default_factory=dict)
    pages: dict[str, dict[str, Any]] = Field(default_factory=dict)
    routes: dict[str, Any] = Field(default_factory=dict)
    schema_version: str = "1.0"

    @property
    def is_empty(self) -> bool:
        return not (self.models or self.actions or self.pages)

    def model_names(self) -> list[str]:
        return list(self.models.keys())

    def get_model(self, name: str) -> dict[str, Any] | None:
        return self.models.get(name)

    def columns(self, name: str) -> dict[str, Any]:
        """Column name → raw type spec for a model, hints excluded."""
        definition = self.models.get(name) or {}
        return {
            key: value
            for key, value in definition.items()
            if key not in RESERVED_MODEL_KEYS
        }

    def relationships(self, name: str) -> dict[str, Any]:
        definition = self.models.get(name) or {}
        rels = definition.get("relationships")
        return rels if isinstance(rels, dict) else {}

    def route_override(self, name: str) -> dict[str, Any]:
        override = self.routes.get(name)
        return override if isinstance(override, dict) else {}
