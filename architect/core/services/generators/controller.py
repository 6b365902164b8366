"""
Controller generator: a resource controller per draft model.

Inertia stacks render pages; Blade and Livewire stacks return views.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.strings import camel_case, pluralize, route_slug

_CONTROLLER_STUB = """\
<?php

declare(strict_types=1);

namespace App\\Http\\Controllers;

use App\\Http\\Requests\\Store{{model}}Request;
use App\\Http\\Requests\\Update{{model}}Request;
use App\\Models\\{{model}};
use Illuminate\\Http\\RedirectResponse;
{{response_import}}
final class {{model}}Controller extends Controller
{
    public function index(): {{response}}
    {
        return {{render_index}};
    }

    public function create(): {{response}}
    {
        return {{render_create}};
    }

    public function store(Store{{model}}Request $request): RedirectResponse
    {
        {{model}}::query()->create($request->validated());

        return redirect()->route('{{slug}}.index');
    }

    public function show({{model}} ${{var}}): {{response}}
    {
        return {{render_show}};
    }

    public function edit({{model}} ${{var}}): {{response}}
    {
        return {{render_edit}};
    }

    public function update(Update{{model}}Request $request, {{model}} ${{var}}): RedirectResponse
    {
        ${{var}}->update($request->validated());

        return redirect()->route('{{slug}}.show', ${{var}});
    }

    public function destroy({{model}} ${{var}}): RedirectResponse
    {
        ${{var}}->delete();

        return redirect()->route('{{slug}}.index');
    }
}
"""


class ControllerGenerator:
    name = "controller"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        files = []
        inertia = self.context.variants.is_inertia()
        for model in draft.model_names():
            slug = route_slug(model)
            var = camel_case(model)
            plural_var = camel_case(pluralize(model))
            index_data = f"'{plural_var}' => {model}::query()->latest()->paginate()"
            record_data = f"'{var}' => ${var}"

            values = {
                "model": model,
                "slug": slug,
                "var": var,
                "render_index": _render(inertia, slug, "index", index_data),
                "render_create": _render(inertia, slug, "create", ""),
                "render_show": _render(inertia, slug, "show", record_data),
                "render_edit": _render(inertia, slug, "edit", record_data),
            }
            if inertia:
                values["response"] = "Response"
                values["response_import"] = "use Inertia\\Inertia;\nuse Inertia\\Response;\n"
            else:
                values["response"] = "View"
                values["response_import"] = "use Illuminate\\View\\View;\n"

            content = self.context.render("controller.stub", _CONTROLLER_STUB, values)
            files.append(self.context.candidate(
                self.name,
                f"app/Http/Controllers/{model}Controller.php",
                content,
                FileOwnership.SCAFFOLD_ONLY,
                reason=f"Resource controller for {model}",
            ))
        return files


def _render(inertia: bool, slug: str, view: str, data: str) -> str:
    args = f", [{data}]" if data else ""
    if inertia:
        return f"Inertia::render('{slug}/{view}'{args})"
    return f"view('{slug}.{view}'{args})"
