"""
Draft loader: reads draft.yaml into a validated ``Draft``.

Only minimal structure is checked here. Column type grammar belongs to
the generators, which fail with ``GenerationError`` on specs they cannot
render.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from architect.core.errors import DraftInvalid, DraftNotFound
from architect.core.models.draft import Draft

logger = logging.getLogger(__name__)

_SECTIONS = ("models", "actions", "pages")
_EMPTY_DRAFT_ERROR = "Draft must contain at least one of: models, actions, pages."


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                hash(key)
            except TypeError:
                continue  # the base constructor reports unhashable keys
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def validate_data(data: Any) -> list[str]:
    """Check the structural requirements of parsed draft data.

    Args:
        data: The object produced by the YAML loader.

    Returns:
        List of error messages; empty when the draft is valid.
    """
    if not isinstance(data, dict):
        return [f"Draft must contain a YAML mapping, got {type(data).__name__}."]

    errors: list[str] = []
    for section in (*_SECTIONS, "routes"):
        value = data.get(section)
        if value is not None and not isinstance(value, dict):
            errors.append(f"'{section}' must be a mapping, got {type(value).__name__}.")

    for section in ("models", "actions"):
        entries = data.get(section)
        if not isinstance(entries, dict):
            continue
        for name, definition in entries.items():
            if definition is not None and not isinstance(definition, dict):
                errors.append(
                    f"{section}.{name} must be a mapping, got {type(definition).__name__}."
                )

    if errors:
        return errors

    if not any(data.get(section) for section in _SECTIONS):
        return [_EMPTY_DRAFT_ERROR]

    return []


def parse_draft_text(content: str, source: str = "<string>") -> Draft:
    """Parse draft YAML content into a ``Draft``.

    Raises:
        DraftInvalid: If the YAML is malformed or fails validation.
    """
    try:
        data = yaml.load(content, Loader=_UniqueKeyLoader)  # noqa: S506 - SafeLoader subclass
    except yaml.YAMLError as e:
        raise DraftInvalid(f"Invalid YAML in {source}: {e}") from e

    errors = validate_data(data)
    if errors:
        raise DraftInvalid(
            f"Draft validation failed for {source}:\n" + "\n".join(errors),
            errors=errors,
        )

    return _hydrate(data)


def load_draft(path: Path | str) -> Draft:
    """Load and validate a draft file.

    Args:
        path: Path to the draft YAML file.

    Returns:
        Validated Draft model.

    Raises:
        DraftNotFound: If the file does not exist.
        DraftInvalid: If the file is malformed or fails validation.
    """
    path = Path(path)
    if not path.is_file():
        raise DraftNotFound(str(path))

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DraftInvalid(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DraftInvalid(f"Cannot decode {path}: {e}") from e

    draft = parse_draft_text(raw, source=str(path))
    logger.debug(
        "Loaded draft %s (%d models, %d actions, %d pages)",
        path,
        len(draft.models),
        len(draft.actions),
        len(draft.pages),
    )
    return draft


def _hydrate(data: dict[str, Any]) -> Draft:
    def section(name: str) -> dict[str, Any]:
        value = data.get(name)
        return value if isinstance(value, dict) else {}

    def entries(name: str) -> dict[str, dict[str, Any]]:
        return {str(key): (value or {}) for key, value in section(name).items()}

    return Draft(
        models=entries("models"),
        actions=entries("actions"),
        pages={
            str(key): (value if isinstance(value, dict) else {})
            for key, value in section("pages").items()
        },
        routes={str(key): value for key, value in section("routes").items()},
        schema_version=str(data.get("schema_version", "1.0")),
    )
