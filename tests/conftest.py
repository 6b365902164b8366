"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from architect.core.engine.orchestrator import BuildOrchestrator
from architect.core.engine.planner import BuildPlanner
from architect.core.models.settings import Settings
from architect.core.persistence.history import BuildHistory
from architect.core.persistence.state_file import StateLedger
from architect.core.services.generators.base import GeneratorContext
from architect.core.services.generators.registry import default_registry

POST_DRAFT = """\
models:
  Post:
    title: string
    body: longtext
"""


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary project directory."""
    return Settings(base_path=tmp_path, ledger_persist_backoff=0)


@pytest.fixture
def write_draft(tmp_path: Path):
    """Write draft YAML (dedented) into the project and return its path."""

    def _write(content: str, name: str = "draft.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def ledger(settings: Settings) -> StateLedger:
    return StateLedger(settings.state_file)


@pytest.fixture
def context(settings: Settings, ledger: StateLedger) -> GeneratorContext:
    return GeneratorContext.from_settings(settings, ledger=ledger)


@pytest.fixture
def make_orchestrator(settings: Settings, ledger: StateLedger):
    """Build an orchestrator wired to the temporary project."""

    def _make(extensions=None, **kwargs) -> BuildOrchestrator:
        context = GeneratorContext.from_settings(settings, ledger=ledger, extensions=extensions)
        history = BuildHistory(settings.history_file, settings.history.max_entries)
        kwargs.setdefault("history", history)
        return BuildOrchestrator(settings, ledger, default_registry(context), **kwargs)

    return _make


@pytest.fixture
def make_planner(settings: Settings, ledger: StateLedger):
    def _make(extensions=None) -> BuildPlanner:
        context = GeneratorContext.from_settings(settings, ledger=ledger, extensions=extensions)
        return BuildPlanner(settings, ledger, default_registry(context))

    return _make
