"""
Variant resolution: which flavour of output each generator emits.

The UI stack decides page file extension and directory; conventions
decide the test framework and API authentication middleware. Values come
from settings, which a package-discovery step may have filled in.
"""

from __future__ import annotations

from architect.core.models.settings import Settings

STACK_INERTIA_REACT = "inertia-react"
STACK_INERTIA_VUE = "inertia-vue"
STACK_LIVEWIRE = "livewire"
STACK_VOLT = "volt"
STACK_BLADE = "blade"

API_AUTH_SANCTUM = "sanctum"
API_AUTH_PASSPORT = "passport"
API_AUTH_NONE = "none"

TEST_PEST = "pest"
TEST_PHPUNIT = "phpunit"

_PAGE_EXTENSIONS = {
    STACK_INERTIA_REACT: ".tsx",
    STACK_INERTIA_VUE: ".vue",
    STACK_LIVEWIRE: ".php",
    STACK_VOLT: ".blade.php",
    STACK_BLADE: ".blade.php",
}

_PAGE_DIRECTORIES = {
    STACK_INERTIA_REACT: "resources/js/pages",
    STACK_INERTIA_VUE: "resources/js/pages",
    STACK_LIVEWIRE: "app/Livewire",
    STACK_VOLT: "resources/views/livewire",
    STACK_BLADE: "resources/views",
}


class VariantResolver:
    """Resolve generator variants from project settings."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def stack(self) -> str:
        stack = self._settings.stack
        return stack if stack in _PAGE_EXTENSIONS else STACK_INERTIA_REACT

    def is_inertia(self) -> bool:
        return self.stack().startswith("inertia")

    def page_extension(self) -> str:
        return _PAGE_EXTENSIONS[self.stack()]

    def pages_directory(self) -> str:
        return _PAGE_DIRECTORIES[self.stack()]

    def test_framework(self) -> str:
        framework = self._settings.conventions.test_framework
        return TEST_PHPUNIT if framework == TEST_PHPUNIT else TEST_PEST

    def api_auth(self) -> str:
        auth = self._settings.conventions.api_auth
        if auth in (API_AUTH_SANCTUM, API_AUTH_PASSPORT):
            return auth
        return API_AUTH_NONE

    def api_middleware(self) -> list[str]:
        return {
            API_AUTH_SANCTUM: ["auth:sanctum"],
            API_AUTH_PASSPORT: ["auth:api"],
        }.get(self.api_auth(), [])
