"""
Tests for reverting the last build.
"""

from pathlib import Path

from architect.core.persistence.state_file import StateLedger
from architect.core.use_cases.build import build, revert
from tests.conftest import POST_DRAFT


class TestRevert:
    def test_nothing_to_revert(self, settings):
        result = revert(settings=settings)
        assert result.success
        assert result.nothing_to_revert

    def test_revert_first_build_deletes_files(self, settings, write_draft, tmp_path: Path):
        write_draft(POST_DRAFT)
        built = build(settings=settings)
        assert built.success

        result = revert(settings=settings)

        assert result.success
        assert sorted(result.deleted) == sorted(built.generated)
        assert result.restored == []
        assert not (tmp_path / "app/Models/Post.php").exists()
        assert StateLedger(settings.state_file).get_last_build_backup() == {}

    def test_revert_restores_previous_content(self, settings, write_draft, tmp_path: Path):
        write_draft(POST_DRAFT)
        build(settings=settings)
        migration = next((tmp_path / "database/migrations").iterdir())
        before = migration.read_text()

        write_draft(POST_DRAFT + "    summary: text\n")
        build(settings=settings)
        assert "summary" in migration.read_text()

        result = revert(settings=settings)

        assert str(migration) in result.restored
        assert migration.read_text() == before

    def test_second_revert_is_noop(self, settings, write_draft):
        write_draft(POST_DRAFT)
        build(settings=settings)
        revert(settings=settings)
        assert revert(settings=settings).nothing_to_revert

    def test_refuses_paths_outside_project(self, settings, tmp_path: Path):
        outside = tmp_path.parent / "outside.txt"
        StateLedger(settings.state_file).save_last_build_backup({str(outside): None})

        result = revert(settings=settings)

        assert not result.success
        assert result.errors[0].startswith(f"Refusing to revert {outside}")
        assert result.deleted == []
