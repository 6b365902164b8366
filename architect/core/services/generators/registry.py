"""
Generator registry: ordered name → generator map.

The registry is the single point of generator management. The
orchestrator and planner never construct generators themselves; they
ask the registry which ones to run. Order is build order.
"""

from __future__ import annotations

import logging

from architect.core.services.generators.action import ActionGenerator
from architect.core.services.generators.api_controller import ApiControllerGenerator
from architect.core.services.generators.base import Generator, GeneratorContext
from architect.core.services.generators.controller import ControllerGenerator
from architect.core.services.generators.factory import FactoryGenerator
from architect.core.services.generators.migration import MigrationGenerator
from architect.core.services.generators.model import ModelGenerator
from architect.core.services.generators.page import PageGenerator
from architect.core.services.generators.request import RequestGenerator
from architect.core.services.generators.route import RouteGenerator
from architect.core.services.generators.seeder import SeederGenerator
from architect.core.services.generators.test import TestGenerator
from architect.core.services.generators.typescript import TypeScriptGenerator

logger = logging.getLogger(__name__)

BUILTIN_GENERATORS = (
    ModelGenerator,
    MigrationGenerator,
    FactoryGenerator,
    SeederGenerator,
    ActionGenerator,
    ControllerGenerator,
    ApiControllerGenerator,
    RequestGenerator,
    RouteGenerator,
    PageGenerator,
    TypeScriptGenerator,
    TestGenerator,
)


class GeneratorRegistry:
    """Ordered registry of generators, looked up by name."""

    def __init__(self) -> None:
        self._generators: dict[str, Generator] = {}

    def register(self, generator: Generator) -> None:
        name = generator.name
        if name in self._generators:
            logger.warning("Overwriting existing generator: %s", name)
        self._generators[name] = generator
        logger.debug("Registered generator: %s", name)

    def get(self, name: str) -> Generator | None:
        return self._generators.get(name)

    def names(self) -> list[str]:
        return list(self._generators.keys())

    def all(self) -> list[Generator]:
        return list(self._generators.values())

    def select(self, only: list[str] | None = None) -> tuple[list[Generator], list[str]]:
        """Pick the generators to run, in registry order.

        Args:
            only: Generator names to restrict to; None or empty means all.

        Returns:
            (generators, errors). Each unknown name yields one error.
        """
        if not only:
            return self.all(), []

        wanted = set(only)
        errors = [
            f"Unknown generator '{name}'. Available: {', '.join(self.names())}"
            for name in dict.fromkeys(only)
            if name not in self._generators
        ]
        return [g for n, g in self._generators.items() if n in wanted], errors


def default_registry(context: GeneratorContext) -> GeneratorRegistry:
    """Build the registry with every built-in generator plus project extensions."""
    registry = GeneratorRegistry()
    for generator_cls in BUILTIN_GENERATORS:
        registry.register(generator_cls(context))
    for name, factory in context.extensions.generators.items():
        generator = factory(context)
        if generator.name != name:
            logger.warning("Custom generator registered as %s reports name %s", name, generator.name)
        registry.register(generator)
    return registry


def parse_only(values: list[str] | tuple[str, ...] | str | None) -> list[str] | None:
    """Normalize ``--only`` values: repeatable and comma-separated."""
    if not values:
        return None
    if isinstance(values, str):
        values = [values]
    names = [part.strip() for value in values for part in value.split(",")]
    names = [n for n in names if n]
    return names or None
