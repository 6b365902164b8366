"""
Action generator: one single-purpose action class per draft action.

    actions:
      UpdatePost:
        model: Post
        params: [Post, attributes]
        return: void
"""

from __future__ import annotations

from typing import Any

from architect.core.errors import GenerationError
from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.strings import camel_case

_ACTION_STUB = """\
<?php

declare(strict_types=1);

namespace App\\Actions;
{{uses}}
final readonly class {{class}}
{
    public function handle({{params}}): {{return}}
    {
        {{body}}
    }
}
"""


class ActionGenerator:
    name = "action"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.actions)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        for action, definition in draft.actions.items():
            model = _optional_str(action, definition, "model")
            returns = _normalize_return(_optional_str(action, definition, "return") or "void", model)
            params = definition.get("params") or []
            if not isinstance(params, list):
                raise GenerationError(action, "'params' must be a list", self.name)

            content = self.context.render("action.stub", _ACTION_STUB, {
                "class": action,
                "uses": f"\nuse App\\Models\\{model};\n" if model else "",
                "params": _param_list(action, params, model),
                "return": returns,
                "body": _body(returns),
            })
            files.append(self.context.candidate(
                self.name,
                f"app/Actions/{action}.php",
                content,
                FileOwnership.REGENERATE,
                reason=f"Action {action}" + (f" on {model}" if model else ""),
            ))
        return files


def _optional_str(action: str, definition: dict[str, Any], key: str) -> str | None:
    value = definition.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise GenerationError(action, f"'{key}' must be a non-empty string", "action")
    return value.strip()


def _normalize_return(returns: str, model: str | None) -> str:
    if returns.lower() == "model" and model:
        return model
    return returns


def _param_list(action: str, params: list[Any], model: str | None) -> str:
    parts = []
    for i, param in enumerate(params):
        if isinstance(param, dict):
            if not isinstance(param.get("name"), str):
                raise GenerationError(action, f"param #{i} needs a 'name'", "action")
            name, php_type = param["name"], str(param.get("type", "mixed"))
        elif isinstance(param, str):
            name, php_type = param, "mixed"
            if model and param.lower() in ("model", model.lower()):
                name, php_type = camel_case(model), model
            elif param == "attributes":
                php_type = "array"
        else:
            raise GenerationError(action, f"param #{i} must be a name or a mapping", "action")
        parts.append(f"{php_type} ${name}")
    return ", ".join(parts)


def _body(returns: str) -> str:
    if returns == "void":
        return "// Implement the action."
    return "throw new \\LogicException('Not implemented.');"
