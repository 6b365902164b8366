"""
Page generator: index/create/show/edit views per draft page.

File extension, directory and markup follow the configured UI stack.
"""

from __future__ import annotations

from architect.core.models.build import GeneratedFile
from architect.core.models.draft import Draft
from architect.core.models.ledger import FileOwnership
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.variants import STACK_INERTIA_REACT, STACK_INERTIA_VUE, STACK_LIVEWIRE
from architect.core.services.strings import kebab_case, studly_case, title_case

RESOURCE_VIEWS = ("index", "create", "show", "edit")

_REACT_STUB = """\
import { Head } from '@inertiajs/react';

export default function {{component}}() {
    return (
        <>
            <Head title="{{title}}" />
            <div className="p-6">
                <h1 className="text-xl font-semibold">{{title}}</h1>
                <p className="mt-2 text-muted-foreground">Page: {{slug}}/{{view}}</p>
            </div>
        </>
    );
}
"""

_VUE_STUB = """\
<script setup lang="ts">
import { Head } from '@inertiajs/vue3';
</script>

<template>
    <Head title="{{title}}" />
    <div class="p-6">
        <h1 class="text-xl font-semibold">{{title}}</h1>
        <p class="mt-2">Page: {{slug}}/{{view}}</p>
    </div>
</template>
"""

_BLADE_STUB = """\
<x-app-layout>
    <div class="p-6">
        <h1 class="text-xl font-semibold">{{title}}</h1>
        <p class="mt-2">Page: {{slug}}/{{view}}</p>
    </div>
</x-app-layout>
"""

_LIVEWIRE_STUB = """\
<?php

declare(strict_types=1);

namespace App\\Livewire\\{{namespace}};

use Livewire\\Component;

final class {{component}} extends Component
{
    public function render()
    {
        return view('livewire.{{slug}}.{{view}}');
    }
}
"""


class PageGenerator:
    name = "page"

    def __init__(self, context: GeneratorContext):
        self.context = context

    def supports(self, draft: Draft) -> bool:
        return bool(draft.pages)

    def generate(self, draft: Draft, draft_path: str) -> list[GeneratedFile]:
        variants = self.context.variants
        stack = variants.stack()
        stub_name, default = _stub_for(stack)
        extension = variants.page_extension()
        directory = variants.pages_directory()

        files = []
        for page in draft.pages:
            slug = kebab_case(page)
            for view in RESOURCE_VIEWS:
                component = f"{studly_case(page)}{studly_case(view)}"
                content = self.context.render(stub_name, default, {
                    "component": component,
                    "namespace": studly_case(page),
                    "title": f"{title_case(view)} {title_case(page)}",
                    "slug": slug,
                    "view": view,
                })
                if stack == STACK_LIVEWIRE:
                    relative = f"{directory}/{studly_case(page)}/{component}{extension}"
                else:
                    relative = f"{directory}/{slug}/{view}{extension}"
                files.append(self.context.candidate(
                    self.name,
                    relative,
                    content,
                    FileOwnership.SCAFFOLD_ONLY,
                    reason=f"{view} page for {page}",
                ))
        return files


def _stub_for(stack: str) -> tuple[str, str]:
    if stack == STACK_INERTIA_REACT:
        return "page.react.stub", _REACT_STUB
    if stack == STACK_INERTIA_VUE:
        return "page.vue.stub", _VUE_STUB
    if stack == STACK_LIVEWIRE:
        return "page.livewire.stub", _LIVEWIRE_STUB
    return "page.blade.stub", _BLADE_STUB
