"""
Tests for the read-only build planner.
"""

from pathlib import Path

from architect.core.models.build import Decision
from tests.conftest import POST_DRAFT


def _snapshot(root: Path) -> dict[str, bytes]:
    return {str(p): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


class TestPlanner:
    """Tests for BuildPlanner.plan."""

    def test_plan_writes_nothing(self, make_planner, write_draft, tmp_path: Path):
        write_draft(POST_DRAFT)
        before = _snapshot(tmp_path)

        plan = make_planner().plan()

        assert plan.success
        assert plan.actions
        assert all(a.decision == Decision.WRITE and a.reason == "new" for a in plan.actions)
        assert _snapshot(tmp_path) == before

    def test_plan_matches_build(self, make_planner, make_orchestrator, write_draft):
        write_draft(POST_DRAFT)
        make_orchestrator().build()
        write_draft(POST_DRAFT + "    summary: text\n")

        plan = make_planner().plan()
        result = make_orchestrator().build()

        built = {(a.path, a.decision.value) for a in result.decisions}
        assert plan.decision_set() == built
        assert {a.decision for a in plan.actions} == {Decision.WRITE, Decision.SKIP, Decision.WARN}

    def test_plan_with_force_matches_build(self, make_planner, make_orchestrator, write_draft):
        write_draft(POST_DRAFT)
        make_orchestrator().build()
        write_draft(POST_DRAFT + "    summary: text\n")

        plan = make_planner().plan(force=True)
        result = make_orchestrator().build(force=True)

        assert plan.decision_set() == {(a.path, a.decision.value) for a in result.decisions}
        assert Decision.WARN not in {a.decision for a in plan.actions}

    def test_short_circuit(self, make_planner, make_orchestrator, write_draft):
        write_draft(POST_DRAFT)
        make_orchestrator().build()

        plan = make_planner().plan()
        assert plan.would_short_circuit
        assert plan.actions == []

    def test_only_bypasses_short_circuit(self, make_planner, make_orchestrator, write_draft):
        write_draft(POST_DRAFT)
        make_orchestrator().build()

        plan = make_planner().plan(only=["model"])
        assert not plan.would_short_circuit
        assert [(a.generator, a.decision) for a in plan.actions] == [("model", Decision.SKIP)]

    def test_plan_does_not_touch_ledger(self, make_planner, write_draft, settings):
        write_draft(POST_DRAFT)
        make_planner().plan()
        assert not settings.state_file.exists()

    def test_errors(self, make_planner, write_draft):
        assert "Draft file not found" in make_planner().plan().errors[0]

        write_draft(POST_DRAFT)
        plan = make_planner().plan(only=["nope"])
        assert not plan.success
        assert "Unknown generator 'nope'" in plan.errors[0]

    def test_to_dict(self, make_planner, write_draft):
        write_draft(POST_DRAFT)
        data = make_planner().plan(only=["model"]).to_dict()
        assert data["success"] is True
        assert data["actions"][0]["decision"] == "write"
        assert data["actions"][0]["ownership"] == "scaffold_only"
