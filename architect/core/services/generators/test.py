"""
Test generator: a feature test per resource controller.

Pest or PHPUnit depending on ``conventions.test_framework``.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.variants import TEST_PHPUNIT
from architect.core.services.strings import route_slug

_PEST_STUB = """\
<?php

declare(strict_types=1);

use App\\Models\\{{model}};

it('lists {{slug}}', function (): void {
    {{model}}::factory()->count(2)->create();

    $this->get(route('{{slug}}.index'))->assertOk();
});

it('renders the create form', function (): void {
    $this->get(route('{{slug}}.create'))->assertOk();
});

it('shows a {{model}}', function (): void {
    $record = {{model}}::factory()->create();

    $this->get(route('{{slug}}.show', $record))->assertOk();
});

it('deletes a {{model}}', function (): void {
    $record = {{model}}::factory()->create();

    $this->delete(route('{{slug}}.destroy', $record))->assertRedirect(route('{{slug}}.index'));
});
"""

_PHPUNIT_STUB = """\
<?php

declare(strict_types=1);

namespace Tests\\Feature\\Controllers;

use App\\Models\\{{model}};
use Illuminate\\Foundation\\Testing\\RefreshDatabase;
use Tests\\TestCase;

final class {{model}}ControllerTest extends TestCase
{
    use RefreshDatabase;

    public function test_index_lists_records(): void
    {
        {{model}}::factory()->count(2)->create();

        $this->get(route('{{slug}}.index'))->assertOk();
    }

    public function test_create_form_renders(): void
    {
        $this->get(route('{{slug}}.create'))->assertOk();
    }

    public function test_show_renders_record(): void
    {
        $record = {{model}}::factory()->create();

        $this->get(route('{{slug}}.show', $record))->assertOk();
    }

    public function test_destroy_deletes_record(): void
    {
        $record = {{model}}::factory()->create();

        $this->delete(route('{{slug}}.destroy', $record))->assertRedirect(route('{{slug}}.index'));
    }
}
"""


class TestGenerator:
    __test__ = False  # not a pytest class

    name = "test"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.models) and self.context.settings.conventions.generate_tests

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        if self.context.variants.test_framework() == TEST_PHPUNIT:
            stub_name, default = "test.phpunit.stub", _PHPUNIT_STUB
        else:
            stub_name, default = "test.pest.stub", _PEST_STUB

        files = []
        for model in draft.model_names():
            content = self.context.render(stub_name, default, {
                "model": model,
                "slug": route_slug(model),
            })
            files.append(self.context.candidate(
                self.name,
                f"tests/Feature/Controllers/{model}ControllerTest.php",
                content,
                FileOwnership.SCAFFOLD_ONLY,
                reason=f"Feature test for {model}Controller",
            ))
        return files
