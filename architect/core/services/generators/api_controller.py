"""
API controller generator: versioned JSON resource controllers.

Only runs when ``conventions.generate_api`` is on. Authentication
middleware follows ``conventions.api_auth``.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.strings import camel_case, studly_case

_API_CONTROLLER_STUB = """\
<?php

declare(strict_types=1);

namespace App\\Http\\Controllers\\Api\\{{version}};

use App\\Http\\Controllers\\Controller;
use App\\Http\\Requests\\Store{{model}}Request;
use App\\Http\\Requests\\Update{{model}}Request;
use App\\Models\\{{model}};
use Illuminate\\Http\\JsonResponse;
use Illuminate\\Routing\\Controllers\\HasMiddleware;
use Illuminate\\Routing\\Controllers\\Middleware;

final class {{model}}Controller extends Controller implements HasMiddleware
{
    public static function middleware(): array
    {
        return [{{middleware}}];
    }

    public function index(): JsonResponse
    {
        return response()->json({{model}}::query()->paginate());
    }

    public function store(Store{{model}}Request $request): JsonResponse
    {
        return response()->json({{model}}::query()->create($request->validated()), 201);
    }

    public function show({{model}} ${{var}}): JsonResponse
    {
        return response()->json(${{var}});
    }

    public function update(Update{{model}}Request $request, {{model}} ${{var}}): JsonResponse
    {
        ${{var}}->update($request->validated());

        return response()->json(${{var}});
    }

    public function destroy({{model}} ${{var}}): JsonResponse
    {
        ${{var}}->delete();

        return response()->json(null, 204);
    }
}
"""


class ApiControllerGenerator:
    name = "api_controller"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models) and self.context.settings.conventions.generate_api

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        version = studly_case(self.context.settings.conventions.api_version)
        middleware = ", ".join(
            f"new Middleware('{m}')" for m in self.context.variants.api_middleware()
        )
        files = []
        for model in draft.model_names():
            content = self.context.render("api_controller.stub", _API_CONTROLLER_STUB, {
                "version": version,
                "model": model,
                "var": camel_case(model),
                "middleware": middleware,
            })
            files.append(self.context.candidate(
                self.name,
                f"app/Http/Controllers/Api/{version}/{model}Controller.php",
                content,
                FileOwnership.SCAFFOLD_ONLY,
                reason=f"API {version} controller for {model}",
            ))
        return files
