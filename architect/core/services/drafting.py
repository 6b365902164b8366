"""
Drafting: turn a natural-language description into draft YAML.

A ``DraftBackend`` is anything that answers a prompt with YAML text,
typically a hosted language model. ``DraftGenerator`` validates each
answer with the draft parser and retries with the validation errors
fed back. When the backend keeps failing it falls back to
``TemplateDraftBackend``, a deterministic skeleton that always parses.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from architect.core.config.draft_loader import parse_draft_text
from architect.core.errors import DraftInvalid
from architect.core.models.settings import AISettings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a Laravel application architect. Generate ONLY valid YAML matching the draft schema.
Output only the YAML document, no markdown fences or explanations.

Schema rules:
- models: keys are singular StudlyCase (Post, Comment). Values are column definitions or nested keys (relationships, seeder, softDeletes).
- Column format: column_name: type:length optional_modifiers (title: string:400, published_at: timestamp nullable, author_id: id:User foreign)
- relationships: belongsTo, hasMany, hasOne, belongsToMany. Use "Model:alias" for aliases.
- seeder: category (essential|development|production), count, json: true
- actions: action name -> model, params, return
- pages: page name -> options
"""

_DASH_BLOCK = re.compile(r"^---\s*\n(.*?)(?=^---|\Z)", re.DOTALL | re.MULTILINE)
_FENCED_BLOCK = re.compile(r"```(?:yaml|yml)?\s*\n(.*?)```", re.DOTALL)


@runtime_checkable
class DraftBackend(Protocol):
    """Something that can answer a drafting prompt with YAML text."""

    def draft_from_description(self, text: str, existing_draft: str | None = None) -> str: ...


class TemplateDraftBackend:
    """Deterministic local backend: one model with CRUD actions, a page and a route."""

    def draft_from_description(self, text: str, existing_draft: str | None = None) -> str:
        name = infer_model_name(text)
        return f"""\
# Generated draft skeleton. Fill in the columns, then run `architect build`.
schema_version: "1.0"

models:
  {name}:
    # title: string:400
    # content: longtext
    # published_at: timestamp nullable
    # author_id: id:User foreign
    #
    # relationships:
    #   belongsTo: User:author
    #   hasMany: Comment
    #
    # seeder:
    #   category: development
    #   count: 10

actions:
  Create{name}:
    model: {name}
    return: {name}
  Update{name}:
    model: {name}
    params: [{name}, attributes]
    return: void
  Delete{name}:
    model: {name}
    params: [{name}]
    return: void

pages:
  {name}: {{}}

routes:
  {name}:
    resource: true
"""


def infer_model_name(description: str) -> str:
    """First word of the description, capitalized; ``Item`` when empty."""
    words = re.findall(r"[A-Za-z][A-Za-z0-9]*", description)
    first = words[0] if words else "Item"
    return first[:1].upper() + first[1:].lower()


def extract_yaml(text: str) -> str:
    """Pull the YAML document out of a model answer.

    Accepts a ``---`` delimited block, a fenced code block, or bare YAML.
    """
    match = _DASH_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    match = _FENCED_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def build_prompt(description: str, existing_yaml: str | None, errors: list[str] | None = None) -> str:
    prompt = f"{SYSTEM_PROMPT}\nGenerate a YAML scaffold definition for:\n\n{description}"
    if existing_yaml:
        prompt += f"\n\nExtend this existing draft (only add new, do not duplicate):\n\n{existing_yaml}"
    if errors:
        prompt += "\n\nPrevious attempt failed validation. Fix these issues:\n"
        prompt += "".join(f"- {err}\n" for err in errors)
    return prompt


@dataclass
class DraftAttempt:
    """Outcome of one generation attempt."""

    number: int
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class GeneratedDraft:
    """YAML text plus how it was obtained."""

    yaml: str
    source: str                        # backend, template
    attempts: list[DraftAttempt] = field(default_factory=list)


class DraftGenerator:
    """Ask a backend for a draft, validating and retrying with feedback."""

    def __init__(self, backend: DraftBackend | None, settings: AISettings):
        self.backend = backend
        self.settings = settings
        self.fallback = TemplateDraftBackend()

    def generate(self, description: str, existing_yaml: str | None = None) -> GeneratedDraft:
        attempts: list[DraftAttempt] = []
        if self.backend is not None and self.settings.enabled:
            feedback: list[str] = []
            for number in range(1, self.settings.max_retries + 2):
                prompt = build_prompt(
                    description,
                    existing_yaml,
                    feedback if self.settings.retry_with_feedback else None,
                )
                attempt = DraftAttempt(number=number)
                attempts.append(attempt)
                try:
                    answer = self.backend.draft_from_description(prompt, existing_yaml)
                except Exception as e:
                    logger.warning("Drafting backend failed on attempt %d: %s", number, e)
                    attempt.errors = [f"Backend error: {e}"]
                    feedback = attempt.errors
                    continue

                yaml_text = extract_yaml(answer)
                attempt.errors = validate_yaml(yaml_text)
                if attempt.ok:
                    logger.info("Draft generated by backend on attempt %d", number)
                    return GeneratedDraft(yaml=yaml_text + "\n", source="backend", attempts=attempts)
                logger.info("Draft attempt %d invalid: %s", number, "; ".join(attempt.errors))
                feedback = attempt.errors

            logger.warning("Drafting backend exhausted %d attempt(s), using template", len(attempts))

        yaml_text = self.fallback.draft_from_description(description, existing_yaml)
        return GeneratedDraft(yaml=yaml_text, source="template", attempts=attempts)


def validate_yaml(yaml_text: str) -> list[str]:
    """Errors from parsing *yaml_text* as a draft; empty when valid."""
    try:
        parse_draft_text(yaml_text, source="generated draft")
    except DraftInvalid as e:
        return list(e.errors)
    return []
