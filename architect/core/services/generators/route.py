"""
Route generator: one routes file with a resource route per model.

Per-model overrides live under the draft's ``routes`` section:

    routes:
      Post: {only: [index, show], middleware: [auth, verified]}
      Tag: {resource: false}
"""

from __future__ import annotations

from typing import Any

from architect.core.errors import GenerationError
from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.strings import route_slug

ROUTES_FILE = "routes/architect.php"

_DEFAULT_MIDDLEWARE = ["auth"]
_RESOURCE_ACTIONS = ("index", "create", "store", "show", "edit", "update", "destroy")

_ROUTES_STUB = """\
<?php

declare(strict_types=1);

{{uses}}
use Illuminate\\Support\\Facades\\Route;

/*
| Generated resource routes. Include this file from routes/web.php:
|     require base_path('routes/architect.php');
*/

{{routes}}
"""


class RouteGenerator:
    name = "route"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models or draft.routes)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        groups: dict[tuple[str, ...], list[str]] = {}
        uses = []
        for model in draft.model_names():
            override = draft.route_override(model)
            if override.get("resource", True) is False:
                continue
            middleware = tuple(_string_list(model, override, "middleware", _DEFAULT_MIDDLEWARE))
            uses.append(f"use App\\Http\\Controllers\\{model}Controller;")
            groups.setdefault(middleware, []).append(_resource_line(model, override))

        blocks = []
        for middleware, lines in groups.items():
            body = "\n".join(f"    {line}" for line in lines)
            if middleware:
                listed = ", ".join(f"'{m}'" for m in middleware)
                blocks.append(f"Route::middleware([{listed}])->group(function (): void {{\n{body}\n}});")
            else:
                blocks.append("\n".join(lines))

        content = self.context.render("routes.stub", _ROUTES_STUB, {
            "uses": "\n".join(uses),
            "routes": "\n\n".join(blocks),
        })
        return [self.context.candidate(
            self.name,
            ROUTES_FILE,
            content,
            FileOwnership.REGENERATE,
            reason="Resource routes",
        )]


def _resource_line(model: str, override: dict[str, Any]) -> str:
    slug = override.get("uri") or route_slug(model)
    if not isinstance(slug, str):
        raise GenerationError(model, "route 'uri' must be a string", "route")
    line = f"Route::resource('{slug.strip('/')}', {model}Controller::class)"
    only = _string_list(model, override, "only", [])
    unknown = [a for a in only if a not in _RESOURCE_ACTIONS]
    if unknown:
        raise GenerationError(model, f"unknown route actions: {', '.join(unknown)}", "route")
    if only:
        line += "->only([" + ", ".join(f"'{a}'" for a in only) + "])"
    return line + ";"


def _string_list(model: str, override: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = override.get(key, default)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise GenerationError(model, f"route '{key}' must be a list of strings", "route")
    return value
