"""Generators: pure functions from a draft to candidate output files."""

from architect.core.services.generators.base import Extensions, Generator, GeneratorContext
from architect.core.services.generators.registry import GeneratorRegistry, default_registry, parse_only

__all__ = [
    "Extensions",
    "Generator",
    "GeneratorContext",
    "GeneratorRegistry",
    "default_registry",
    "parse_only",
]
