"""
Tests for persistence: state ledger, change detection and build history.
"""

import json
from pathlib import Path

from architect.core.models.build import BuildResult
from architect.core.models.ledger import LEDGER_VERSION, FileOwnership, GeneratedFileRecord, LedgerState
from architect.core.persistence.history import BuildHistory, HistoryEntry
from architect.core.persistence.state_file import StateLedger, load_state, save_state
from architect.core.services.change_detector import ChangeDetector
from architect.core.services.hashing import hash_structured, hash_text


def _record(path: str, content: str = "x", table: str | None = None) -> GeneratedFileRecord:
    return GeneratedFileRecord(
        path=path,
        hash=hash_text(content),
        ownership=FileOwnership.REGENERATE,
        table=table,
        generator="migration",
    )


class TestHashing:
    """Tests for content hashing."""

    def test_sha256_hex(self):
        digest = hash_text("hello")
        assert digest == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"

    def test_bytes_and_text_agree(self):
        assert hash_text("héllo") == hash_text("héllo".encode("utf-8"))

    def test_different_content_differs(self):
        assert hash_text("a") != hash_text("b")

    def test_structured_keeps_insertion_order(self):
        assert hash_structured({"a": 1, "b": 2}) != hash_structured({"b": 2, "a": 1})
        assert hash_structured({"a": 1, "b": 2}) == hash_structured({"a": 1, "b": 2})


class TestStateFile:
    """Tests for ledger load/save."""

    def test_load_missing_returns_fresh(self, tmp_path: Path):
        state = load_state(tmp_path / "nope.json")
        assert state.version == "unknown"
        assert state.last_run is None
        assert state.generated == {}

    def test_load_corrupt_returns_fresh(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_text("not json at all {{{")
        assert load_state(path).generated == {}

    def test_save_uses_document_keys(self, tmp_path: Path):
        path = tmp_path / "state.json"
        ledger = StateLedger(path)
        ledger.save(LedgerState())

        data = json.loads(path.read_text())
        assert data["version"] == LEDGER_VERSION
        assert data["lastRun"]
        assert data["drafts"] == {}
        assert data["generated"] == {}
        assert "lastBuildBackup" not in data

    def test_save_atomic_no_partial(self, tmp_path: Path):
        path = tmp_path / "state.json"
        save_state(LedgerState(), path)
        assert list(tmp_path.glob(".architect-state_*.tmp")) == []

    def test_roundtrip(self, tmp_path: Path):
        path = tmp_path / "nested" / "state.json"
        state = LedgerState()
        state.generated["/p/a.php"] = _record("/p/a.php", table="posts")
        save_state(state, path)

        loaded = load_state(path)
        assert loaded.generated["/p/a.php"].table == "posts"
        assert loaded.generated["/p/a.php"].ownership == FileOwnership.REGENERATE


class TestStateLedger:
    """Tests for the ledger manager."""

    def test_update_merges(self, tmp_path: Path):
        ledger = StateLedger(tmp_path / "state.json")
        ledger.update("draft.yaml", "h1", {"/p/a.php": _record("/p/a.php")})
        ledger.update("draft.yaml", "h2", {"/p/b.php": _record("/p/b.php")})

        state = ledger.load()
        assert set(state.generated) == {"/p/a.php", "/p/b.php"}
        assert ledger.get_draft_hash("draft.yaml") == "h2"

    def test_update_without_hash_keeps_recorded(self, tmp_path: Path):
        ledger = StateLedger(tmp_path / "state.json")
        ledger.update("draft.yaml", "h1", {})
        ledger.update("draft.yaml", None, {"/p/a.php": _record("/p/a.php")})
        assert ledger.get_draft_hash("draft.yaml") == "h1"
        assert ledger.get_record("/p/a.php") is not None

    def test_table_reverse_lookup(self, tmp_path: Path):
        ledger = StateLedger(tmp_path / "state.json")
        ledger.update("draft.yaml", "h", {"/p/m.php": _record("/p/m.php", table="posts")})
        assert ledger.get_generated_path_for_table("posts") == "/p/m.php"
        assert ledger.get_generated_path_for_table("tags") is None

    def test_last_build_backup(self, tmp_path: Path):
        ledger = StateLedger(tmp_path / "state.json")
        ledger.save_last_build_backup({"/p/a.php": "old", "/p/b.php": None})
        assert ledger.get_last_build_backup() == {"/p/a.php": "old", "/p/b.php": None}

        ledger.clear_last_build_backup()
        assert ledger.get_last_build_backup() == {}


class TestChangeDetector:
    """Tests for draft change detection."""

    def test_unrecorded_draft_changed(self, tmp_path: Path):
        detector = ChangeDetector(StateLedger(tmp_path / "state.json"))
        assert detector.has_draft_changed("draft.yaml", "abc") is True

    def test_recorded_hash(self, tmp_path: Path):
        ledger = StateLedger(tmp_path / "state.json")
        ledger.update("draft.yaml", "abc", {})
        detector = ChangeDetector(ledger)
        assert detector.has_draft_changed("draft.yaml", "abc") is False
        assert detector.has_draft_changed("draft.yaml", "def") is True

    def test_loaded_hash_skips_ledger_read(self, tmp_path: Path, monkeypatch):
        ledger = StateLedger(tmp_path / "state.json")
        ledger.update("draft.yaml", "abc", {})
        detector = ChangeDetector(ledger)

        def fail(*args):
            raise AssertionError("ledger read twice")

        monkeypatch.setattr(ledger, "get_draft_hash", fail)
        assert detector.has_draft_changed("draft.yaml", "abc", None) is True
        assert detector.has_draft_changed("draft.yaml", "abc", "abc") is False

    def test_compute_draft_hash_is_byte_exact(self, tmp_path: Path):
        path = tmp_path / "draft.yaml"
        path.write_text("models: {}\n")
        first = ChangeDetector.compute_draft_hash(path)
        path.write_text("models: {}\n\n")
        assert ChangeDetector.compute_draft_hash(path) != first

    def test_missing_draft_hashes_empty(self, tmp_path: Path):
        assert ChangeDetector.compute_draft_hash(tmp_path / "nope.yaml") == hash_text(b"")


class TestBuildHistory:
    """Tests for the build history log."""

    def test_write_and_read(self, tmp_path: Path):
        history = BuildHistory(tmp_path / ".architect" / "history.ndjson")
        result = BuildResult(generated={"/p/a.php": _record("/p/a.php")})
        history.write(HistoryEntry.from_result(result, "draft.yaml", only=["model"]))

        entries = history.read_all()
        assert len(entries) == 1
        assert entries[0].status == "ok"
        assert entries[0].written == ["/p/a.php"]
        assert entries[0].only == ["model"]

    def test_status_values(self):
        assert HistoryEntry.from_result(BuildResult.no_changes_result(), "d").status == "no_changes"
        assert HistoryEntry.from_result(BuildResult.failure(["boom"]), "d").status == "failed"

    def test_trims_to_max_entries(self, tmp_path: Path):
        history = BuildHistory(tmp_path / "history.ndjson", max_entries=3)
        for i in range(5):
            history.write(HistoryEntry(draft_path=f"d{i}", status="ok"))

        entries = history.read_all()
        assert [e.draft_path for e in entries] == ["d2", "d3", "d4"]

    def test_skips_corrupt_lines(self, tmp_path: Path):
        path = tmp_path / "history.ndjson"
        history = BuildHistory(path)
        history.write(HistoryEntry(draft_path="good", status="ok"))
        with path.open("a") as f:
            f.write("{not json\n")
        assert [e.draft_path for e in history.read_all()] == ["good"]
