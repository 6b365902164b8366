"""
Tests for drafting a YAML draft from a description.
"""

import logging
from pathlib import Path

from architect.core.config.draft_loader import parse_draft_text
from architect.core.models.settings import AISettings
from architect.core.services.drafting import (
    DraftGenerator,
    TemplateDraftBackend,
    build_prompt,
    extract_yaml,
    infer_model_name,
    validate_yaml,
)
from architect.core.use_cases.draft import backend_for, draft

VALID_ANSWER = "models:\n  Invoice:\n    total: decimal:8,2\n"


class FakeBackend:
    """Backend that replays canned answers and records the prompts it saw."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.existing: list[str | None] = []

    def draft_from_description(self, text, existing_draft=None):
        self.prompts.append(text)
        self.existing.append(existing_draft)
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


class TestHelpers:
    def test_infer_model_name(self):
        assert infer_model_name("invoice tracker for freelancers") == "Invoice"
        assert infer_model_name("123 BLOG posts") == "Blog"
        assert infer_model_name("") == "Item"

    def test_extract_dash_block(self):
        text = "Sure, here it is:\n---\nmodels:\n  Post: {}\n---\nAnything else?"
        assert extract_yaml(text) == "models:\n  Post: {}"

    def test_extract_fenced_block(self):
        text = "Here:\n```yaml\nmodels:\n  Post: {}\n```\n"
        assert extract_yaml(text) == "models:\n  Post: {}"

    def test_extract_bare(self):
        assert extract_yaml("\n  models: {}\n") == "models: {}"

    def test_prompt_includes_existing_and_errors(self):
        prompt = build_prompt("a blog", "models:\n  Post: {}\n", ["models: bad"])
        assert "a blog" in prompt
        assert "Extend this existing draft" in prompt
        assert "- models: bad" in prompt


class TestTemplate:
    def test_template_is_a_valid_draft(self):
        text = TemplateDraftBackend().draft_from_description("invoice tracker")
        assert validate_yaml(text) == []

        parsed = parse_draft_text(text)
        assert parsed.model_names() == ["Invoice"]
        assert parsed.get_model("Invoice") == {}
        assert list(parsed.actions) == ["CreateInvoice", "UpdateInvoice", "DeleteInvoice"]
        assert list(parsed.pages) == ["Invoice"]
        assert parsed.route_override("Invoice") == {"resource": True}


class TestDraftGenerator:
    def test_first_answer_valid(self):
        backend = FakeBackend(VALID_ANSWER)
        result = DraftGenerator(backend, AISettings()).generate("invoices")

        assert result.source == "backend"
        assert result.yaml == VALID_ANSWER
        assert len(result.attempts) == 1
        assert result.attempts[0].ok

    def test_retry_with_feedback(self):
        backend = FakeBackend("models: [broken", VALID_ANSWER)
        result = DraftGenerator(backend, AISettings(max_retries=2)).generate("invoices")

        assert result.source == "backend"
        assert len(result.attempts) == 2
        assert not result.attempts[0].ok
        assert "Previous attempt failed validation" not in backend.prompts[0]
        assert "Previous attempt failed validation" in backend.prompts[1]

    def test_retry_without_feedback(self):
        backend = FakeBackend("nonsense: true", VALID_ANSWER)
        settings = AISettings(retry_with_feedback=False)
        DraftGenerator(backend, settings).generate("invoices")
        assert "Previous attempt failed validation" not in backend.prompts[1]

    def test_exhausted_falls_back_to_template(self):
        backend = FakeBackend("nonsense: true")
        result = DraftGenerator(backend, AISettings(max_retries=2)).generate("invoices")

        assert result.source == "template"
        assert len(result.attempts) == 3
        assert all(not a.ok for a in result.attempts)
        assert validate_yaml(result.yaml) == []

    def test_backend_exception(self, caplog):
        backend = FakeBackend(RuntimeError("offline"))
        with caplog.at_level(logging.WARNING):
            result = DraftGenerator(backend, AISettings(max_retries=0)).generate("invoices")

        assert result.source == "template"
        assert result.attempts[0].errors == ["Backend error: offline"]
        assert "Drafting backend failed" in caplog.text

    def test_disabled_skips_backend(self):
        backend = FakeBackend(VALID_ANSWER)
        result = DraftGenerator(backend, AISettings(enabled=False)).generate("invoices")

        assert result.source == "template"
        assert result.attempts == []
        assert backend.prompts == []


class TestDraftUseCase:
    def test_writes_output(self, settings, tmp_path: Path):
        result = draft("invoice tracker", output="draft.yaml", settings=settings)

        assert result.error is None
        assert result.source == "template"
        assert result.output == str(tmp_path / "draft.yaml")
        assert (tmp_path / "draft.yaml").read_text() == result.yaml

    def test_no_output_writes_nothing(self, settings, tmp_path: Path):
        result = draft("invoice tracker", settings=settings)
        assert result.output is None
        assert not (tmp_path / "draft.yaml").exists()

    def test_existing_draft_is_passed_to_backend(self, settings, write_draft):
        write_draft("models:\n  Post: {title: string}\n")
        backend = FakeBackend(VALID_ANSWER)

        result = draft("add invoices", existing_draft_path="draft.yaml", backend=backend, settings=settings)

        assert result.source == "backend"
        assert backend.existing == ["models:\n  Post: {title: string}\n"]
        assert "Extend this existing draft" in backend.prompts[0]

    def test_to_dict(self, settings):
        data = draft("invoices", settings=settings).to_dict()
        assert data["source"] == "template"
        assert data["attempts"] == 0
        assert "models:" in data["yaml"]

    def test_unknown_provider_uses_template(self, settings, caplog):
        settings.ai.provider = "openai"
        with caplog.at_level(logging.WARNING):
            assert backend_for(settings) is None
        assert "not installed" in caplog.text
